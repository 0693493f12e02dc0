import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException

from videogen.config import Settings, get_settings
from videogen.models.generation import Failed, GenerationRequest
from videogen.models.schemas import ErrorDetail, VideoRequest, VideoResultResponse
from videogen.services.demo_fallback import submit_with_demo_fallback
from videogen.services.generation_client import GenerationClient
from videogen.services.http_client import get_http_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

_STATUS_BY_KIND = {
    "ValidationError": 400,
    "Busy": 409,
    "PollTimeout": 504,
}


@router.post("/generate-video", response_model=VideoResultResponse)
async def generate_video(
    payload: VideoRequest,
    http_client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
):
    prompt = (payload.prompt or "").strip()
    if len(prompt) > settings.prompt_char_limit:
        raise HTTPException(
            status_code=400,
            detail=f"Prompt too long. Maximum {settings.prompt_char_limit} characters.",
        )

    request = GenerationRequest(
        prompt=prompt,
        duration_seconds=payload.duration or settings.video_duration_seconds,
        resolution=payload.resolution or settings.video_resolution,
        credential=payload.api_key,
    )
    client = GenerationClient(
        settings.video_api_endpoint,
        credential=settings.video_api_key,
        poll_interval_seconds=settings.poll_interval_seconds,
        max_poll_attempts=settings.poll_max_attempts,
        timeout_seconds=settings.http_timeout_seconds,
        http_client=http_client,
    )

    if settings.demo_fallback_enabled:
        result = await submit_with_demo_fallback(
            client,
            request,
            video_url=settings.demo_video_url,
            delay_seconds=settings.demo_fallback_delay_seconds,
        )
    else:
        result = await client.submit(request)

    if isinstance(result, Failed):
        status_code = _STATUS_BY_KIND.get(result.kind, 502)
        raise HTTPException(
            status_code=status_code,
            detail=ErrorDetail(kind=result.kind, message=result.message).model_dump(),
        )

    return VideoResultResponse(video_url=result.video_url, demo=result.is_demo)


@router.get("/health")
def health_check():
    return {"status": "ok"}
