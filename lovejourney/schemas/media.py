from pydantic import BaseModel


class UploadedMedia(BaseModel):
    url: str
    id: str
