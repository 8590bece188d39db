# File: civic_reports\models\community.py
# Project: civic-reports-backend
# Auto-added for reference

from __future__ import annotations
from datetime import datetime
from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from civic_reports.db.base import Base
from civic_reports.models.report import utcnow

class CommunityPost(Base):
    __tablename__ = "community_posts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    device_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    caption: Mapped[str] = mapped_column(String(2000), nullable=False)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False)
    address: Mapped[str] = mapped_column(String(300), default="", nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    comments: Mapped[list["CommunityComment"]] = relationship(
        cascade="all, delete-orphan",
        order_by=lambda: (CommunityComment.created_at, CommunityComment.id),
    )
    upvotes: Mapped[list["CommunityUpvote"]] = relationship(
        cascade="all, delete-orphan",
        order_by="CommunityUpvote.id",
    )

class CommunityComment(Base):
    __tablename__ = "community_comments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("community_posts.id", ondelete="CASCADE"), index=True, nullable=False)
    device_id: Mapped[str] = mapped_column(String(128), nullable=False)
    text: Mapped[str] = mapped_column(String(2000), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

class CommunityUpvote(Base):
    __tablename__ = "community_upvotes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("community_posts.id", ondelete="CASCADE"), index=True, nullable=False)
    device_id: Mapped[str] = mapped_column(String(128), nullable=False)
    __table_args__ = (UniqueConstraint("post_id", "device_id", name="uq_community_upvote"),)
