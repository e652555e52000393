# justyou/core/errors.py
"""
Domain exceptions raised by services and repositories.

Routes either catch these and raise HTTPException, or let them reach the
handlers registered in justyou.main.
"""


class JustYouError(Exception):
    """Base class for application errors."""


class NotFoundError(JustYouError):
    pass


class PermissionDeniedError(JustYouError):
    pass


class AIServiceError(JustYouError):
    """Anything that went wrong between a feature and the language model."""

    # shown to the user; the exception text is only logged
    user_message = "The AI service is unavailable. Please try again."


class ProviderError(AIServiceError):
    """The provider call failed (network, non-2xx status, invalid body)."""


class RelayError(AIServiceError):
    """A remote relay answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(AIServiceError):
    """The relay envelope has no content[0].text."""


class ExtractionError(AIServiceError):
    """No usable JSON could be pulled out of the model's text."""

    def __init__(self, message: str, user_message: str | None = None, raw: str | None = None):
        super().__init__(message)
        if user_message:
            self.user_message = user_message
        self.raw = raw
