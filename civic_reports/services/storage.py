#civic_reports\services\storage.py
import os, time, uuid, logging
import requests
from civic_reports.core.config import Settings
from civic_reports.core.errors import ValidationError, UpstreamError

logger = logging.getLogger(__name__)

ALLOWED = {"image/jpeg", "image/png", "image/webp", "image/gif", "image/heic"}


class ImageStorage:
    """Stores uploaded report photos and hands back the URL the documents keep.

    Uses Supabase Storage when it is configured, otherwise the local uploads
    directory served at /uploads.
    """

    def __init__(self, cfg: Settings):
        self.upload_dir = cfg.upload_dir
        self.public_base_url = (cfg.public_base_url or "").rstrip("/")
        self.max_bytes = cfg.max_image_bytes
        self.supabase_url = cfg.supabase_url
        self.supabase_key = cfg.supabase_service_role
        self.bucket = cfg.supabase_bucket

    def save(self, data: bytes, content_type: str, filename: str, base_url: str = "") -> str:
        if not data:
            raise ValidationError("Image is empty")
        if content_type not in ALLOWED:
            raise ValidationError("Unsupported image type")
        if len(data) > self.max_bytes:
            raise ValidationError("Image is too large")
        key = make_object_key(filename)
        if self.supabase_url and self.supabase_key:
            return self._upload_supabase(data, content_type, key)
        return self._write_local(data, key, base_url)

    def _write_local(self, data: bytes, key: str, base_url: str) -> str:
        os.makedirs(self.upload_dir, exist_ok=True)
        with open(os.path.join(self.upload_dir, key), "wb") as fh:
            fh.write(data)
        base = self.public_base_url or base_url.rstrip("/")
        return f"{base}/uploads/{key}"

    def _upload_supabase(self, data: bytes, content_type: str, key: str) -> str:
        url = f"{self.supabase_url}/storage/v1/object/{self.bucket}/{key}"
        try:
            r = requests.post(url, headers={
                "Authorization": f"Bearer {self.supabase_key}",
                "Content-Type": content_type,
                "x-upsert": "true",
            }, data=data, timeout=30)
            r.raise_for_status()
        except requests.RequestException as e:
            logger.error("Image upload failed: %s", e)
            raise UpstreamError("Failed to store image") from e
        # public URL pattern (bucket must be public):
        return f"{self.supabase_url}/storage/v1/object/public/{self.bucket}/{key}"


def make_object_key(filename: str) -> str:
    ext = (filename.rsplit(".", 1)[-1] if "." in filename else "jpg").lower()
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex}.{ext}"
