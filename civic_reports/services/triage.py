# civic_reports/services/triage.py
"""Staff-side mutations on reports and community posts.

Status moves are permissive: any of unresolved/assigned/resolved can follow
any other. ``assigned`` always carries a department, reopening to
``unresolved`` clears it, and ``resolved`` keeps it as a record of who handled
the report. Status and department are written in the same commit.
"""
import logging
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session

from civic_reports.core.errors import ValidationError
from civic_reports.models.report import Report, ReportStatus
from civic_reports.services.queries import get_community_post, get_report

logger = logging.getLogger(__name__)


def parse_status(value: Optional[str]) -> ReportStatus:
    try:
        return ReportStatus((value or "").strip().lower())
    except ValueError:
        raise ValidationError("status must be one of: unresolved, assigned, resolved")


def _apply(report: Report, status: ReportStatus, department: Optional[str]) -> None:
    if status == ReportStatus.assigned:
        department = (department or report.assigned_department or "").strip()
        if not department:
            raise ValidationError("department is required")
        report.assigned_department = department
    elif status == ReportStatus.unresolved:
        # reopened reports go back to the unassigned pool
        report.assigned_department = ""
    elif department is not None:
        report.assigned_department = department.strip()
    report.status = status


def assign(db: Session, report_id: int, department: Optional[str]) -> Report:
    department = (department or "").strip()
    if not department:
        raise ValidationError("department is required")
    report = get_report(db, report_id)
    _apply(report, ReportStatus.assigned, department)
    db.commit()
    db.refresh(report)
    logger.info("Report %s assigned to %s", report.id, department)
    return report


def resolve(db: Session, report_id: int) -> Report:
    # assigned_department is kept so the dashboard still shows who handled it
    report = get_report(db, report_id)
    _apply(report, ReportStatus.resolved, None)
    db.commit()
    db.refresh(report)
    logger.info("Report %s resolved", report.id)
    return report


def set_status(db: Session, report_id: int, status: Optional[str], department: Optional[str] = None) -> Report:
    new_status = parse_status(status)
    report = get_report(db, report_id)
    _apply(report, new_status, department)
    db.commit()
    db.refresh(report)
    return report


def update_report(db: Session, report_id: int, changes: Mapping[str, Any]) -> Report:
    """Generic update. Only status and department are mutable; anything else in
    ``changes`` is dropped."""
    status = changes.get("status")
    department = changes.get("assigned_department")
    if status is None and department is None:
        return get_report(db, report_id)
    if status is None:
        report = get_report(db, report_id)
        if report.status != ReportStatus.assigned:
            raise ValidationError("department can only be changed on an assigned report")
        if not department.strip():
            raise ValidationError("department is required")
        report.assigned_department = department.strip()
        db.commit()
        db.refresh(report)
        return report
    return set_status(db, report_id, status, department)


def delete_report(db: Session, report_id: int) -> None:
    report = get_report(db, report_id)
    db.delete(report)
    db.commit()
    logger.info("Report %s deleted", report_id)


def delete_community_post(db: Session, post_id: int) -> None:
    post = get_community_post(db, post_id)
    db.delete(post)
    db.commit()
    logger.info("Community post %s deleted", post_id)
