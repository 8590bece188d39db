# File: civic_reports/routers/reports.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from civic_reports.db.session import get_db
from civic_reports.models.report import Report
from civic_reports.schemas.report import (
    ReportOut,
    CommentIn,
    UpvoteIn,
    AssignIn,
    StatusPatch,
    ReportUpdate,
)
from civic_reports.core.deps import Submission, read_submission, get_geocoder, get_storage, store_image
from civic_reports.core.identity import device_header, resolve_device_id
from civic_reports.core.ratelimit import limiter
from civic_reports.services import engagement, queries, submission, triage
from civic_reports.services.geocoding import Geocoder
from civic_reports.services.storage import ImageStorage

router = APIRouter(prefix="/reports", tags=["reports"])


def report_out(obj: Report) -> ReportOut:
    report_dict = {
        "id": obj.id,
        "user_id": obj.user_id,
        "device_id": obj.device_id,
        "caption": obj.caption,
        "image_url": obj.image_url,
        "address": obj.address or "",
        "latitude": obj.latitude,
        "longitude": obj.longitude,
        "status": obj.status.value,  # Convert enum to string
        "assigned_department": obj.assigned_department or "",
        "community": obj.community,
        "comments": [
            {"device_id": c.device_id, "text": c.text, "created_at": c.created_at}
            for c in obj.comments
        ],
        "upvotes": [u.device_id for u in obj.upvotes],
        "created_at": obj.created_at,
        "updated_at": obj.updated_at,
    }
    return ReportOut.model_validate(report_dict)


@router.get("", response_model=List[ReportOut])
@limiter.limit("60/minute")
def list_reports(request: Request, db: Session = Depends(get_db)):
    return [report_out(r) for r in queries.list_reports(db)]


@router.post("", response_model=ReportOut, status_code=201)
@limiter.limit("10/minute")
def create_report(
    request: Request,
    sub: Submission = Depends(read_submission),
    header_device: Optional[str] = Depends(device_header),
    db: Session = Depends(get_db),
    geocoder: Optional[Geocoder] = Depends(get_geocoder),
    storage: ImageStorage = Depends(get_storage),
):
    # validate text fields before touching storage
    submission.check_required(sub.caption, "caption")
    device_id = resolve_device_id(sub.device_id, header_device)
    submission.check_required(device_id, "deviceId")

    image_url = store_image(request, storage, sub)
    obj = submission.submit_report(
        db,
        caption=sub.caption,
        address=sub.address,
        device_id=device_id,
        user_id=sub.user_id,
        image_url=image_url,
        mirror_to_community=sub.post_to_community,
        geocoder=geocoder,
    )
    return report_out(obj)


@router.get("/{report_id}", response_model=ReportOut)
def get_report(report_id: int, db: Session = Depends(get_db)):
    return report_out(queries.get_report(db, report_id))


@router.put("/{report_id}", response_model=ReportOut)
@router.patch("/{report_id}", response_model=ReportOut)
def update_report(report_id: int, body: ReportUpdate, db: Session = Depends(get_db)):
    changes = body.model_dump(exclude_unset=True)
    return report_out(triage.update_report(db, report_id, changes))


@router.patch("/{report_id}/status", response_model=ReportOut)
def update_status(report_id: int, body: StatusPatch, db: Session = Depends(get_db)):
    return report_out(triage.set_status(db, report_id, body.status, body.department))


@router.put("/{report_id}/resolve", response_model=ReportOut)
def resolve_report(report_id: int, db: Session = Depends(get_db)):
    return report_out(triage.resolve(db, report_id))


@router.put("/{report_id}/assign", response_model=ReportOut)
def assign_report(report_id: int, body: Optional[AssignIn] = None, db: Session = Depends(get_db)):
    department = body.department if body else None
    return report_out(triage.assign(db, report_id, department))


@router.delete("/{report_id}")
def delete_report(report_id: int, db: Session = Depends(get_db)):
    triage.delete_report(db, report_id)
    return {"message": "Report deleted successfully"}


@router.post("/{report_id}/comment", response_model=ReportOut)
def add_comment(
    report_id: int,
    body: CommentIn,
    header_device: Optional[str] = Depends(device_header),
    db: Session = Depends(get_db),
):
    device_id = resolve_device_id(body.device_id, header_device)
    return report_out(engagement.comment_on_report(db, report_id, device_id, body.text))


@router.put("/{report_id}/upvote", response_model=ReportOut)
@router.post("/{report_id}/upvote", response_model=ReportOut)
def upvote_report(
    report_id: int,
    body: Optional[UpvoteIn] = None,
    header_device: Optional[str] = Depends(device_header),
    db: Session = Depends(get_db),
):
    device_id = resolve_device_id(body.device_id if body else None, header_device)
    return report_out(engagement.upvote_report(db, report_id, device_id))
