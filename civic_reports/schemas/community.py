from typing import List, Optional
from datetime import datetime

from civic_reports.schemas.report import CamelModel, CommentOut


class CommunityPostOut(CamelModel):
    id: int
    user_id: str
    device_id: str
    caption: str
    image_url: str
    address: str = ""

    comments: List[CommentOut] = []
    upvotes: List[str] = []

    created_at: datetime
    updated_at: Optional[datetime] = None
