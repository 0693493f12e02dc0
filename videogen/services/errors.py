from typing import Optional


class GenerationError(RuntimeError):
    """Base class for every terminal failure of a generation attempt."""

    kind = "GenerationError"

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(GenerationError):
    kind = "ValidationError"


class NetworkUnavailable(GenerationError):
    """No response was received from the provider."""

    kind = "NetworkUnavailable"


class ApiError(GenerationError):
    kind = "ApiError"

    def __init__(self, status_code: int, status_text: str, message: Optional[str] = None):
        self.status_code = status_code
        self.status_text = status_text
        super().__init__(message or f"API Error: {status_code} {status_text}".rstrip())


class UnexpectedResponseFormat(GenerationError):
    kind = "UnexpectedResponseFormat"


class GenerationFailed(GenerationError):
    kind = "GenerationFailed"


class PollTimeout(GenerationError):
    kind = "PollTimeout"


class Busy(GenerationError):
    kind = "Busy"
