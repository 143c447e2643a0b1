import enum

from app.schemas.course import CamelModel


class MediaKind(str, enum.Enum):
    thumbnail = "thumbnail"
    overview_video = "overviewVideo"


class MediaUploadRead(CamelModel):
    url: str
    public_id: str
