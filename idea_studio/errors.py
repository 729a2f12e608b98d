"""
Error taxonomy for the idea generation pipeline
"""
from typing import Any, Dict, Optional


# Diagnostic payload dumps are cut to this many characters
MAX_DIAGNOSTIC_LENGTH = 500


def truncate(text: str, limit: int = MAX_DIAGNOSTIC_LENGTH) -> str:
    """Cut text to a bounded length for logs and error details"""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class IdeaStudioError(Exception):
    """Base class for all pipeline errors"""

    status_code = 500
    public_message = "Idea generation failed"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else message

    def to_response(self) -> Dict[str, Any]:
        """Body returned to HTTP callers"""
        return {"error": self.public_message, "details": self.details}


class ProfileValidationError(IdeaStudioError):
    """Malformed or missing profile fields"""

    status_code = 422
    public_message = "Invalid profile"

    def __init__(self, field_errors: Dict[str, str]):
        fields = ", ".join(sorted(field_errors))
        super().__init__(f"Invalid profile fields: {fields}", details=field_errors)
        self.field_errors = field_errors


class ProviderError(IdeaStudioError):
    """Any upstream generation failure other than rate limiting"""


class MissingCredentialError(ProviderError):
    """The generation API key is not configured"""

    def __init__(self, credential: str = "OPENAI_API_KEY"):
        super().__init__(f"Missing credential: {credential} is not configured")
        self.credential = credential


class ProviderRateLimited(IdeaStudioError):
    """The provider kept rate limiting after all retries"""

    status_code = 429
    public_message = "The idea generator is busy, please try again later"

    def __init__(self, attempts: int):
        super().__init__(f"Provider rate limit persisted after {attempts} attempts")
        self.attempts = attempts


class ResponseParseError(IdeaStudioError):
    """Provider output could not be parsed into an idea"""

    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message, details={"message": message, "received": truncate(raw_text)})
        self.raw_text = raw_text


class MissingFieldError(ResponseParseError):
    """Provider output lacks a required field"""

    def __init__(self, field: str, raw_text: str = ""):
        super().__init__(f"Missing required field: {field}", raw_text=raw_text)
        self.field = field


class PersistenceError(IdeaStudioError):
    """The relational store rejected or failed an operation"""

    public_message = "Could not save the idea"


class AuthenticationRequired(IdeaStudioError):
    """The endpoint needs a signed-in caller"""

    status_code = 401
    public_message = "Login required"


class AccessDenied(IdeaStudioError):
    """The caller does not own the resource"""

    status_code = 403
    public_message = "Not allowed to change this idea"


class IdeaNotFound(IdeaStudioError):
    """No stored idea has the requested id"""

    status_code = 404
    public_message = "Idea not found"

    def __init__(self, idea_id: str):
        super().__init__(f"Idea {idea_id} not found")
        self.idea_id = idea_id
