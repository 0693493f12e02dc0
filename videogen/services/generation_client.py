"""Async client driving one prompt-to-video generation attempt.

An attempt moves from submission either straight to a terminal result (the
provider answered with a video URL) or into a polling loop against
``{endpoint}/status/{job_id}``. Every outcome, including failures, is handed
back as an immutable ``GenerationResult``; nothing here fabricates success.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

import httpx

from videogen.models.generation import (
    Failed,
    GenerationRequest,
    GenerationResult,
    Pending,
    PollState,
    Succeeded,
)
from videogen.services.errors import (
    ApiError,
    Busy,
    GenerationError,
    GenerationFailed,
    NetworkUnavailable,
    PollTimeout,
    UnexpectedResponseFormat,
)
from videogen.services.response_rules import (
    extract_failure_detail,
    extract_job_id,
    extract_status,
    extract_video_url,
)

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 2.0
DEFAULT_MAX_POLL_ATTEMPTS = 30

TransitionCallback = Callable[[GenerationResult], None]


class GenerationClient:
    """Submit prompts to a video-generation endpoint, one attempt at a time.

    A client instance rejects a second ``submit`` while an earlier one is in
    flight (``Failed(Busy)``). ``cancel()`` abandons the in-flight attempt:
    polling stops and the awaiting caller receives ``asyncio.CancelledError``
    instead of a result.
    """

    def __init__(
        self,
        endpoint: str,
        *,
        credential: Optional[str] = None,
        poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        max_poll_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS,
        timeout_seconds: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
        on_transition: Optional[TransitionCallback] = None,
    ):
        endpoint = (endpoint or "").strip().rstrip("/")
        if not endpoint:
            raise ValueError("endpoint is required")
        if max_poll_attempts <= 0:
            raise ValueError("max_poll_attempts must be positive")
        if poll_interval_seconds < 0:
            raise ValueError("poll_interval_seconds cannot be negative")

        self.endpoint = endpoint
        self.credential = credential
        self.poll_interval_seconds = poll_interval_seconds
        self.max_poll_attempts = max_poll_attempts
        self.timeout_seconds = timeout_seconds
        self._http_client = http_client
        self._on_transition = on_transition
        self._active: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        return self._active is not None

    def status_url(self, job_id: str) -> str:
        return f"{self.endpoint}/status/{quote(str(job_id), safe='')}"

    async def submit(self, request: GenerationRequest) -> GenerationResult:
        # Busy is answered to the second caller only; the in-flight attempt's
        # observers never see it.
        if self._active is not None:
            logger.warning("Rejected submission while a generation is already in flight")
            return Failed(Busy("A video generation is already in progress"))

        try:
            request.validate()
        except GenerationError as exc:
            return self._finish(Failed(exc))

        self._active = asyncio.ensure_future(self._execute(request))
        try:
            result = await self._active
        except asyncio.CancelledError:
            logger.info("Generation attempt abandoned by caller")
            raise
        finally:
            self._active = None
        return self._finish(result)

    def cancel(self) -> bool:
        task = self._active
        if task is None or task.done():
            return False
        return task.cancel()

    def _finish(self, result: GenerationResult) -> GenerationResult:
        if isinstance(result, Failed):
            logger.warning("Video generation failed (%s): %s", result.kind, result.message)
        else:
            logger.info("Video generation succeeded: %s", result.video_url)
        self._emit(result)
        return result

    def _emit(self, result: GenerationResult) -> None:
        if self._on_transition is None:
            return
        try:
            self._on_transition(result)
        except Exception:
            logger.exception("Transition callback failed for %s", type(result).__name__)

    async def _execute(self, request: GenerationRequest) -> GenerationResult:
        try:
            if self._http_client is not None:
                return await self._run(self._http_client, request)
            async with httpx.AsyncClient(timeout=self.timeout_seconds, follow_redirects=True) as client:
                return await self._run(client, request)
        except GenerationError as exc:
            return Failed(exc)

    async def _run(self, client: httpx.AsyncClient, request: GenerationRequest) -> GenerationResult:
        credential = request.credential or self.credential
        body = await self._request_json(
            client,
            "POST",
            self.endpoint,
            credential,
            json=request.to_payload(),
        )

        video_url = extract_video_url(body)
        if video_url:
            return Succeeded(video_url)

        job_id = extract_job_id(body)
        if job_id:
            state = PollState(
                job_id=job_id,
                max_attempts=self.max_poll_attempts,
                interval_seconds=self.poll_interval_seconds,
            )
            return await self._poll(client, state, credential)

        raise UnexpectedResponseFormat("Unexpected API response format")

    async def _poll(self, client: httpx.AsyncClient, state: PollState, credential: Optional[str]) -> Succeeded:
        url = self.status_url(state.job_id)
        logger.info("Polling job %s every %.1fs (max %d attempts)", state.job_id, state.interval_seconds, state.max_attempts)
        self._emit(Pending(state.job_id, state.attempts_made))

        while True:
            await asyncio.sleep(state.interval_seconds)
            state.attempts_made += 1
            body = await self._request_json(client, "GET", url, credential)

            status = extract_status(body)
            if status == "completed":
                video_url = extract_video_url(body)
                if video_url:
                    return Succeeded(video_url)
                logger.debug("Job %s reported completed without a video URL", state.job_id)
            elif status == "failed":
                raise GenerationFailed(extract_failure_detail(body) or "Video generation failed")

            if state.exhausted:
                raise PollTimeout(
                    f"Video generation timeout after {state.attempts_made} status checks"
                )
            self._emit(Pending(state.job_id, state.attempts_made))

    async def _request_json(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        credential: Optional[str],
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        headers = {}
        if json is not None:
            headers["Content-Type"] = "application/json"
        if credential:
            headers["Authorization"] = f"Bearer {credential}"

        try:
            response = await client.request(method, url, json=json, headers=headers)
        except httpx.DecodingError as exc:
            logger.warning("%s %s returned an undecodable body: %s", method, url, exc)
            raise UnexpectedResponseFormat(f"Video API returned an undecodable body: {exc}") from exc
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise NetworkUnavailable(f"Failed to reach the video API: {exc}") from exc

        if not response.is_success:
            raise ApiError(response.status_code, response.reason_phrase)

        try:
            body = response.json()
        except ValueError as exc:
            raise UnexpectedResponseFormat("Video API returned a non-JSON body") from exc
        if not isinstance(body, dict):
            raise UnexpectedResponseFormat("Unexpected API response format")
        return body
