from typing import Optional

from pydantic import BaseModel, Field

from videogen.models.generation import Resolution


class VideoRequest(BaseModel):
    prompt: str = Field(..., description="Text prompt describing the video")
    duration: Optional[int] = Field(default=None, gt=0, description="Video length in seconds")
    resolution: Optional[Resolution] = None
    api_key: Optional[str] = Field(default=None, description="Bearer credential for the video API")


class VideoResultResponse(BaseModel):
    status: str = "completed"
    video_url: str
    demo: bool = False


class ErrorDetail(BaseModel):
    kind: str
    message: str
