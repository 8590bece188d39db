# civic_reports/core/deps.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Request
from starlette.datastructures import UploadFile

from civic_reports.core.errors import ValidationError
from civic_reports.services.geocoding import Geocoder
from civic_reports.services.storage import ImageStorage

TRUTHY = {"true", "1", "yes", "on"}


@dataclass
class Submission:
    """Fields of a report or community post, from a multipart form or a JSON body."""
    caption: Optional[str] = None
    address: Optional[str] = None
    device_id: Optional[str] = None
    user_id: Optional[str] = None
    image_url: Optional[str] = None
    post_to_community: bool = False
    image: Optional[UploadFile] = None


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in TRUTHY


def _str(value) -> Optional[str]:
    if value is None or isinstance(value, UploadFile):
        return None
    return str(value)


async def read_submission(request: Request) -> Submission:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise ValidationError("Malformed JSON body")
        if not isinstance(data, dict):
            raise ValidationError("Expected a JSON object")
        image = None
    else:
        form = await request.form()
        data = dict(form)
        image = form.get("image")
        if not isinstance(image, UploadFile) or not image.filename:
            image = None

    return Submission(
        caption=_str(data.get("caption")),
        address=_str(data.get("address")),
        device_id=_str(data.get("deviceId")),
        user_id=_str(data.get("userId")),
        image_url=_str(data.get("imageUrl")),
        post_to_community=_flag(data.get("postToCommunity")),
        image=image,
    )


def get_geocoder(request: Request) -> Optional[Geocoder]:
    return getattr(request.app.state, "geocoder", None)


def get_storage(request: Request) -> ImageStorage:
    return request.app.state.image_storage


def store_image(request: Request, storage: ImageStorage, sub: Submission) -> Optional[str]:
    """URL for the submission's image: the uploaded file if any, else the given imageUrl."""
    if sub.image is None:
        return sub.image_url
    data = sub.image.file.read()
    return storage.save(
        data,
        sub.image.content_type or "",
        sub.image.filename or "upload.jpg",
        base_url=str(request.base_url),
    )
