"""Shared schema building blocks."""

from typing import Annotated, Optional

from pydantic import AfterValidator, AnyUrl, BaseModel, ConfigDict, TypeAdapter, ValidationError

_any_url = TypeAdapter(AnyUrl)


def validate_absolute_url(value: str) -> str:
    """Reject anything that is not an absolute URL, keeping the original text."""
    try:
        _any_url.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid URL format")
    return value


UrlStr = Annotated[str, AfterValidator(validate_absolute_url)]


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
    )


class SuccessResponse(BaseSchema):
    """Result envelope for mutations that report success instead of raising."""

    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
