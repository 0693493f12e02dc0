import asyncio
import logging

from videogen.config import DEFAULT_DEMO_VIDEO_URL
from videogen.models.generation import Failed, GenerationRequest, GenerationResult, Succeeded
from videogen.services.errors import NetworkUnavailable
from videogen.services.generation_client import GenerationClient

logger = logging.getLogger(__name__)


async def submit_with_demo_fallback(
    client: GenerationClient,
    request: GenerationRequest,
    *,
    video_url: str = DEFAULT_DEMO_VIDEO_URL,
    delay_seconds: float = 2.0,
) -> GenerationResult:
    """Submit, serving a placeholder video when the provider is unreachable.

    Only ``NetworkUnavailable`` is replaced. The placeholder comes back as
    ``Succeeded(is_demo=True)`` so it never passes for a real generation.
    """
    result = await client.submit(request)
    if not (isinstance(result, Failed) and isinstance(result.error, NetworkUnavailable)):
        return result

    logger.warning(
        "Video API unreachable (%s); serving DEMO placeholder %s instead of a generated video",
        result.message,
        video_url,
    )
    await asyncio.sleep(delay_seconds)
    return Succeeded(video_url, is_demo=True)
