import pytest

from videogen.models.generation import (
    Failed,
    GenerationRequest,
    Pending,
    PollState,
    Resolution,
    Succeeded,
)
from videogen.services.errors import GenerationFailed, PollTimeout, ValidationError


def test_payload_uses_resolution_value():
    request = GenerationRequest(prompt="city at night", duration_seconds=5, resolution="480p")
    assert request.to_payload() == {"prompt": "city at night", "duration": 5, "resolution": "480p"}


def test_validate_rejects_blank_prompt():
    with pytest.raises(ValidationError):
        GenerationRequest(prompt="\t").validate()


def test_request_is_immutable():
    request = GenerationRequest(prompt="x")
    with pytest.raises(AttributeError):
        request.prompt = "y"


def test_failed_exposes_kind_and_message():
    result = Failed(GenerationFailed("Video generation failed"))
    assert result.kind == "GenerationFailed"
    assert result.message == "Video generation failed"
    assert result.is_terminal
    with pytest.raises(GenerationFailed):
        result.unwrap()


def test_pending_is_not_terminal():
    pending = Pending("job-1")
    assert not pending.is_terminal
    with pytest.raises(RuntimeError):
        pending.unwrap()


def test_succeeded_unwrap():
    assert Succeeded("https://v").unwrap() == "https://v"


def test_poll_state_exhaustion():
    state = PollState(job_id="job-1", max_attempts=2)
    assert not state.exhausted
    state.attempts_made = 2
    assert state.exhausted


def test_error_kinds_are_distinct():
    assert PollTimeout("x").kind != GenerationFailed("x").kind
    assert Resolution("720p") is Resolution.HD
