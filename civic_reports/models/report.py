# File: civic_reports/models/report.py
from __future__ import annotations
from datetime import datetime, timezone
from enum import Enum as PyEnum
from sqlalchemy import String, Float, Enum, Boolean, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from civic_reports.db.base import Base

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class ReportStatus(PyEnum):
    unresolved = "unresolved"
    assigned = "assigned"
    resolved = "resolved"

class Report(Base):
    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    device_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    caption: Mapped[str] = mapped_column(String(2000), nullable=False)
    image_url: Mapped[str] = mapped_column(String(500), nullable=False)
    address: Mapped[str] = mapped_column(String(300), default="", nullable=False)

    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    status: Mapped[ReportStatus] = mapped_column(Enum(ReportStatus), default=ReportStatus.unresolved, index=True)
    assigned_department: Mapped[str] = mapped_column(String(120), default="", nullable=False)
    community: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    comments: Mapped[list["ReportComment"]] = relationship(
        cascade="all, delete-orphan",
        order_by=lambda: (ReportComment.created_at, ReportComment.id),
    )
    upvotes: Mapped[list["ReportUpvote"]] = relationship(
        cascade="all, delete-orphan",
        order_by="ReportUpvote.id",
    )

class ReportComment(Base):
    __tablename__ = "report_comments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    report_id: Mapped[int] = mapped_column(ForeignKey("reports.id", ondelete="CASCADE"), index=True, nullable=False)
    device_id: Mapped[str] = mapped_column(String(128), nullable=False)
    text: Mapped[str] = mapped_column(String(2000), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

class ReportUpvote(Base):
    __tablename__ = "report_upvotes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    report_id: Mapped[int] = mapped_column(ForeignKey("reports.id", ondelete="CASCADE"), index=True, nullable=False)
    device_id: Mapped[str] = mapped_column(String(128), nullable=False)
    __table_args__ = (UniqueConstraint("report_id", "device_id", name="uq_report_upvote"),)

Index("ix_reports_lat_lng", Report.latitude, Report.longitude)
