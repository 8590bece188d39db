# civic_reports/services/submission.py
import logging
from typing import Optional

from sqlalchemy.orm import Session

from civic_reports.core.errors import ValidationError
from civic_reports.core.identity import resolve_device_id
from civic_reports.models.community import CommunityPost
from civic_reports.models.report import Report, ReportStatus
from civic_reports.services.geocoding import Geocoder

logger = logging.getLogger(__name__)


def check_required(value: Optional[str], name: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{name} is required")
    return value


def submit_report(
    db: Session,
    *,
    caption: Optional[str],
    device_id: Optional[str],
    image_url: Optional[str],
    address: Optional[str] = None,
    user_id: Optional[str] = None,
    mirror_to_community: bool = False,
    geocoder: Optional[Geocoder] = None,
) -> Report:
    """File a new report, and a matching community post when asked to.

    Both rows go in with one commit. Geocoding is best-effort: a failed or
    empty lookup leaves the coordinates unset.
    """
    caption = check_required(caption, "caption")
    device_id = check_required(device_id, "deviceId")
    image_url = check_required(image_url, "image")
    user_id = resolve_device_id(user_id, device_id)
    address = (address or "").strip()

    latitude = longitude = None
    if address and geocoder is not None:
        try:
            coords = geocoder.lookup(address)
        except Exception:
            logger.exception("Geocoder failed for %r, filing without coordinates", address)
            coords = None
        if coords:
            latitude, longitude = coords

    report = Report(
        caption=caption,
        address=address,
        image_url=image_url,
        user_id=user_id,
        device_id=device_id,
        latitude=latitude,
        longitude=longitude,
        status=ReportStatus.unresolved,
        assigned_department="",
        community=bool(mirror_to_community),
    )
    db.add(report)
    if mirror_to_community:
        db.add(CommunityPost(
            caption=caption,
            address=address,
            image_url=image_url,
            user_id=user_id,
            device_id=device_id,
        ))
    db.commit()
    db.refresh(report)
    logger.info("Report %s created by %s (community=%s)", report.id, device_id, report.community)
    return report


def create_community_post(
    db: Session,
    *,
    caption: Optional[str],
    device_id: Optional[str],
    image_url: Optional[str],
    address: Optional[str] = None,
    user_id: Optional[str] = None,
) -> CommunityPost:
    caption = check_required(caption, "caption")
    device_id = check_required(resolve_device_id(device_id, user_id), "deviceId")
    image_url = check_required(image_url, "image")

    post = CommunityPost(
        caption=caption,
        address=(address or "").strip(),
        image_url=image_url,
        user_id=resolve_device_id(user_id, device_id),
        device_id=device_id,
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("Community post %s created by %s", post.id, device_id)
    return post
