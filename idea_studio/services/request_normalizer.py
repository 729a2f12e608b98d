"""
Validation and defaulting of incoming user profiles
"""
from typing import Any, Dict, Mapping, Type

from pydantic import BaseModel, ValidationError

from idea_studio.errors import ProfileValidationError
from idea_studio.logging_config import logger
from idea_studio.schemas import GeneratedIdea, Profile


def _field_errors(error: ValidationError) -> Dict[str, str]:
    """Flatten pydantic errors into a {field: message} map"""
    field_errors: Dict[str, str] = {}
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "body"
        field_errors.setdefault(field, item["msg"])
    return field_errors


def _validate(model: Type[BaseModel], payload: Mapping[str, Any]):
    if not isinstance(payload, Mapping):
        raise ProfileValidationError({"body": "Expected a JSON object"})
    try:
        return model.model_validate(dict(payload))
    except ValidationError as e:
        field_errors = _field_errors(e)
        logger.info(f"Rejected {model.__name__} payload: {field_errors}")
        raise ProfileValidationError(field_errors) from e


def normalize_profile(payload: Mapping[str, Any]) -> Profile:
    """
    Validate a raw profile payload and fill in defaults

    Args:
        payload: Decoded JSON body

    Returns:
        Normalized Profile

    Raises:
        ProfileValidationError: If any field is missing or malformed
    """
    return _validate(Profile, payload)


def parse_generated_idea(payload: Mapping[str, Any]) -> GeneratedIdea:
    """Validate a client-supplied idea, as sent to the save endpoint"""
    return _validate(GeneratedIdea, payload)
