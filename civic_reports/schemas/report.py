from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, Literal, List
from datetime import datetime, timezone

Status = Literal["unresolved", "assigned", "resolved"]


class CamelModel(BaseModel):
    """Wire models use camelCase keys; Python code uses snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    @field_validator("*")
    @classmethod
    def utc_datetimes(cls, v):
        # SQLite drops tzinfo; stored values are UTC
        if isinstance(v, datetime) and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class CommentOut(CamelModel):
    device_id: str
    text: str
    created_at: datetime


class ReportOut(CamelModel):
    id: int
    user_id: str
    device_id: str
    caption: str
    image_url: str
    address: str = ""

    latitude: Optional[float] = None
    longitude: Optional[float] = None

    status: Status
    assigned_department: str = ""
    community: bool = False

    comments: List[CommentOut] = []
    # device ids of everyone who upvoted, in upvote order
    upvotes: List[str] = []

    created_at: datetime
    updated_at: Optional[datetime] = None


class CommentIn(BaseModel):
    device_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("deviceId", "device_id", "userId"))
    # older clients send the comment body as "comment"
    text: Optional[str] = Field(default=None, validation_alias=AliasChoices("text", "comment"))


class UpvoteIn(BaseModel):
    device_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("deviceId", "device_id", "userId"))


class AssignIn(BaseModel):
    department: Optional[str] = None


class StatusPatch(BaseModel):
    status: Optional[str] = None
    department: Optional[str] = Field(default=None, validation_alias=AliasChoices("department", "assignedDepartment"))


class ReportUpdate(BaseModel):
    """Body of PUT/PATCH /reports/{id}. Fields outside status and department are ignored."""
    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = None
    assigned_department: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("assignedDepartment", "assigned_department", "department")
    )


class StatusSummaryOut(BaseModel):
    total: int
    unresolved: int
    assigned: int
    resolved: int
    community: int


class MapPointOut(CamelModel):
    id: int
    caption: str
    address: str = ""
    status: Status
    latitude: float
    longitude: float
