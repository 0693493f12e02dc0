from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from videogen.services.errors import GenerationError, ValidationError


class Resolution(str, Enum):
    SD = "480p"
    HD = "720p"
    FULL_HD = "1080p"


@dataclass(frozen=True)
class GenerationRequest:
    prompt: str
    duration_seconds: int = 10
    resolution: Resolution = Resolution.HD
    credential: Optional[str] = None

    def validate(self) -> None:
        if not (self.prompt or "").strip():
            raise ValidationError("Please enter a video prompt")
        if self.duration_seconds <= 0:
            raise ValidationError("Duration must be a positive number of seconds")
        try:
            Resolution(self.resolution)
        except ValueError as exc:
            raise ValidationError(f"Unsupported resolution: {self.resolution}") from exc

    def to_payload(self) -> dict:
        return {
            "prompt": self.prompt,
            "duration": self.duration_seconds,
            "resolution": Resolution(self.resolution).value,
        }


@dataclass(frozen=True)
class Pending:
    job_id: str
    attempts_made: int = 0

    is_terminal = False

    def unwrap(self) -> str:
        raise RuntimeError(f"Job {self.job_id} has not finished yet")


@dataclass(frozen=True)
class Succeeded:
    video_url: str
    is_demo: bool = False

    is_terminal = True

    def unwrap(self) -> str:
        return self.video_url


@dataclass(frozen=True)
class Failed:
    error: GenerationError

    is_terminal = True

    @property
    def kind(self) -> str:
        return self.error.kind

    @property
    def message(self) -> str:
        return self.error.message

    def unwrap(self) -> str:
        raise self.error


GenerationResult = Union[Pending, Succeeded, Failed]


@dataclass
class PollState:
    job_id: str
    max_attempts: int = 30
    interval_seconds: float = 2.0
    attempts_made: int = 0

    @property
    def exhausted(self) -> bool:
        return self.attempts_made >= self.max_attempts
