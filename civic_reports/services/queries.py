# civic_reports/services/queries.py
"""Reads over the report and community stores.

The list functions return everything, newest first. Narrowing to one device,
one status or to mappable reports is done by the caller with the helpers below.
"""
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from civic_reports.core.errors import NotFound
from civic_reports.models.community import CommunityPost
from civic_reports.models.report import Report, ReportStatus


def list_reports(db: Session) -> list[Report]:
    return db.query(Report).order_by(Report.created_at.desc(), Report.id.desc()).all()


def list_community_posts(db: Session) -> list[CommunityPost]:
    return (
        db.query(CommunityPost)
        .order_by(CommunityPost.created_at.desc(), CommunityPost.id.desc())
        .all()
    )


def get_report(db: Session, report_id: int) -> Report:
    report = db.query(Report).filter(Report.id == report_id).first()
    if not report:
        raise NotFound("Report not found")
    return report


def get_community_post(db: Session, post_id: int) -> CommunityPost:
    post = db.query(CommunityPost).filter(CommunityPost.id == post_id).first()
    if not post:
        raise NotFound("Post not found")
    return post


def reports_for_device(reports: Iterable[Report], device_id: str) -> list[Report]:
    """The "my reports" view."""
    return [r for r in reports if device_id and (r.device_id == device_id or r.user_id == device_id)]


def reports_with_status(reports: Iterable[Report], status: ReportStatus) -> list[Report]:
    return [r for r in reports if r.status == status]


def reports_with_coordinates(reports: Iterable[Report]) -> list[Report]:
    return [r for r in reports if r.latitude is not None and r.longitude is not None]


def reports_created_since(reports: Iterable[Report], since: Optional[datetime]) -> list[Report]:
    if since is None:
        return list(reports)
    return [r for r in reports if _aware(r.created_at) >= since]


def count_by_status(reports: Iterable[Report]) -> dict[str, int]:
    counts = {s.value: 0 for s in ReportStatus}
    for r in reports:
        counts[r.status.value] += 1
    return counts


def count_by_department(reports: Iterable[Report]) -> list[tuple[str, int]]:
    counts = Counter(
        r.assigned_department for r in reports
        if r.status == ReportStatus.assigned and r.assigned_department
    )
    return counts.most_common()


def range_to_dt(range_key: str) -> Optional[datetime]:
    now = datetime.now(timezone.utc)
    if range_key == "today": return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if range_key == "7d": return now - timedelta(days=7)
    if range_key == "30d": return now - timedelta(days=30)
    if range_key == "90d": return now - timedelta(days=90)
    return None


def _aware(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
