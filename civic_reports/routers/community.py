# File: civic_reports\routers\community.py
# Project: civic-reports-backend
# Auto-added for reference

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from civic_reports.db.session import get_db
from civic_reports.models.community import CommunityPost
from civic_reports.schemas.community import CommunityPostOut
from civic_reports.schemas.report import CommentIn, UpvoteIn
from civic_reports.core.deps import Submission, read_submission, get_storage, store_image
from civic_reports.core.identity import device_header, resolve_device_id
from civic_reports.core.ratelimit import limiter
from civic_reports.services import engagement, queries, submission, triage
from civic_reports.services.storage import ImageStorage

router = APIRouter(prefix="/community", tags=["community"])


def post_out(obj: CommunityPost) -> CommunityPostOut:
    return CommunityPostOut.model_validate({
        "id": obj.id,
        "user_id": obj.user_id,
        "device_id": obj.device_id,
        "caption": obj.caption,
        "image_url": obj.image_url,
        "address": obj.address or "",
        "comments": [
            {"device_id": c.device_id, "text": c.text, "created_at": c.created_at}
            for c in obj.comments
        ],
        "upvotes": [u.device_id for u in obj.upvotes],
        "created_at": obj.created_at,
        "updated_at": obj.updated_at,
    })


@router.get("", response_model=List[CommunityPostOut])
@limiter.limit("60/minute")
def list_posts(request: Request, db: Session = Depends(get_db)):
    return [post_out(p) for p in queries.list_community_posts(db)]


@router.post("", response_model=CommunityPostOut, status_code=201)
@limiter.limit("10/minute")
def create_post(
    request: Request,
    sub: Submission = Depends(read_submission),
    header_device: Optional[str] = Depends(device_header),
    db: Session = Depends(get_db),
    storage: ImageStorage = Depends(get_storage),
):
    submission.check_required(sub.caption, "caption")
    device_id = resolve_device_id(sub.device_id, sub.user_id, header_device)
    submission.check_required(device_id, "deviceId")

    image_url = store_image(request, storage, sub)
    obj = submission.create_community_post(
        db,
        caption=sub.caption,
        address=sub.address,
        device_id=device_id,
        user_id=sub.user_id,
        image_url=image_url,
    )
    return post_out(obj)


@router.get("/{post_id}", response_model=CommunityPostOut)
def get_post(post_id: int, db: Session = Depends(get_db)):
    return post_out(queries.get_community_post(db, post_id))


@router.put("/{post_id}/upvote", response_model=CommunityPostOut)
@router.post("/{post_id}/upvote", response_model=CommunityPostOut)
def upvote_post(
    post_id: int,
    body: Optional[UpvoteIn] = None,
    header_device: Optional[str] = Depends(device_header),
    db: Session = Depends(get_db),
):
    device_id = resolve_device_id(body.device_id if body else None, header_device)
    return post_out(engagement.upvote_post(db, post_id, device_id))


@router.post("/{post_id}/comment", response_model=CommunityPostOut)
def add_comment(
    post_id: int,
    body: CommentIn,
    header_device: Optional[str] = Depends(device_header),
    db: Session = Depends(get_db),
):
    device_id = resolve_device_id(body.device_id, header_device)
    return post_out(engagement.comment_on_post(db, post_id, device_id, body.text))


@router.delete("/{post_id}")
def delete_post(post_id: int, db: Session = Depends(get_db)):
    triage.delete_community_post(db, post_id)
    return {"message": "Community post deleted successfully"}
