# civic_reports/services/engagement.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from civic_reports.core.errors import ValidationError
from civic_reports.models.community import CommunityComment, CommunityPost, CommunityUpvote
from civic_reports.models.report import Report, ReportComment, ReportUpvote, utcnow
from civic_reports.services.queries import get_community_post, get_report

logger = logging.getLogger(__name__)


def _device(device_id: Optional[str]) -> str:
    device_id = (device_id or "").strip()
    if not device_id:
        raise ValidationError("deviceId is required")
    return device_id


def _text(text: Optional[str]) -> str:
    text = (text or "").strip()
    if not text:
        raise ValidationError("Comment text is required")
    return text


def _add_upvote(db: Session, parent, vote) -> None:
    """Insert-if-absent. The unique constraint on (parent, device) is the
    membership check, so two racing requests still leave a single row."""
    parent.updated_at = utcnow()
    parent.upvotes.append(vote)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.debug("Duplicate upvote by %s ignored", vote.device_id)


def upvote_post(db: Session, post_id: int, device_id: Optional[str]) -> CommunityPost:
    device_id = _device(device_id)
    post = get_community_post(db, post_id)
    if device_id not in {u.device_id for u in post.upvotes}:
        _add_upvote(db, post, CommunityUpvote(device_id=device_id))
    return get_community_post(db, post_id)


def upvote_report(db: Session, report_id: int, device_id: Optional[str]) -> Report:
    device_id = _device(device_id)
    report = get_report(db, report_id)
    if device_id not in {u.device_id for u in report.upvotes}:
        _add_upvote(db, report, ReportUpvote(device_id=device_id))
    return get_report(db, report_id)


def comment_on_post(db: Session, post_id: int, device_id: Optional[str], text: Optional[str]) -> CommunityPost:
    device_id = _device(device_id)
    text = _text(text)
    post = get_community_post(db, post_id)
    now = utcnow()
    post.comments.append(CommunityComment(device_id=device_id, text=text, created_at=now))
    post.updated_at = now
    db.commit()
    db.refresh(post)
    return post


def comment_on_report(db: Session, report_id: int, device_id: Optional[str], text: Optional[str]) -> Report:
    device_id = _device(device_id)
    text = _text(text)
    report = get_report(db, report_id)
    now = utcnow()
    report.comments.append(ReportComment(device_id=device_id, text=text, created_at=now))
    report.updated_at = now
    db.commit()
    db.refresh(report)
    return report
