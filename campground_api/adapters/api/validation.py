# campground_api/adapters/api/validation.py
"""
Request body schemas.

Every rule runs before a service is called. A failing body raises
ValidationFailedError carrying one human-readable message per problem,
so the client gets all of them at once:

    "Title is required, Price must be at least 0"

String fields are trimmed, must be non-empty, and are rejected (not
stripped) when they contain markup that could execute in a browser.
"""
import re
from typing import Any, Dict, Iterable, List, Tuple, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from campground_api.core.domain.exceptions import ValidationFailedError

DANGEROUS_HTML = re.compile(r"<script|<iframe|javascript:|onerror=|onload=", re.IGNORECASE)
DANGEROUS_HTML_MESSAGE = "Contains potentially dangerous HTML content. Please remove any HTML tags."

_NESTED_KEY = re.compile(r"^(?P<root>[A-Za-z_][A-Za-z0-9_]*)\[(?P<field>[A-Za-z_][A-Za-z0-9_]*)\]$")

M = TypeVar("M", bound=BaseModel)

_LABELS = {"body": "Review body"}


def _label(name: str) -> str:
    return _LABELS.get(name) or name[:1].upper() + name[1:]


def _required_text(value: Any, field: str) -> Any:
    if value is None:
        raise PydanticCustomError("required", "{label} is required", {"label": _label(field)})
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise PydanticCustomError("required", "{label} is required", {"label": _label(field)})
        if DANGEROUS_HTML.search(value):
            raise PydanticCustomError("dangerous_html", DANGEROUS_HTML_MESSAGE)
    return value


def _blank_is_missing(value: Any, field: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("required", "{label} is required", {"label": _label(field)})
    return value


# ---------------------------------------------------------------------------
# Campgrounds
# ---------------------------------------------------------------------------

class CampgroundInput(BaseModel):
    title: str
    location: str
    price: float = Field(allow_inf_nan=False)
    description: str

    @field_validator("title", "location", "description", mode="before")
    @classmethod
    def _text(cls, value: Any, info: ValidationInfo) -> Any:
        return _required_text(value, info.field_name)

    @field_validator("price", mode="before")
    @classmethod
    def _price_present(cls, value: Any, info: ValidationInfo) -> Any:
        value = _blank_is_missing(value, info.field_name)
        return value.strip() if isinstance(value, str) else value

    @field_validator("price")
    @classmethod
    def _price_bounds(cls, value: float) -> float:
        if value < 0:
            raise PydanticCustomError("price_min", "Price must be at least 0")
        return value


class CampgroundPayload(BaseModel):
    """`{campground: {...}, deleteImages: [...]}`"""
    model_config = ConfigDict(populate_by_name=True)

    campground: CampgroundInput
    delete_images: List[str] = Field(default_factory=list, alias="deleteImages")

    @field_validator("delete_images", mode="before")
    @classmethod
    def _listify(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------

class ReviewInput(BaseModel):
    rating: int
    body: str

    @field_validator("body", mode="before")
    @classmethod
    def _text(cls, value: Any, info: ValidationInfo) -> Any:
        return _required_text(value, info.field_name)

    @field_validator("rating", mode="before")
    @classmethod
    def _whole_number(cls, value: Any, info: ValidationInfo) -> Any:
        value = _blank_is_missing(value, info.field_name)
        if isinstance(value, bool):
            raise PydanticCustomError("number_type", "Rating must be a number")
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                raise PydanticCustomError("number_type", "Rating must be a number")
        if isinstance(value, float):
            if not value.is_integer():
                raise PydanticCustomError("whole_number", "Rating must be a whole number")
            value = int(value)
        return value

    @field_validator("rating")
    @classmethod
    def _rating_bounds(cls, value: int) -> int:
        if value < 1:
            raise PydanticCustomError("rating_min", "Rating must be at least 1")
        if value > 5:
            raise PydanticCustomError("rating_max", "Rating must be at most 5")
        return value


class ReviewPayload(BaseModel):
    """`{review: {rating, body}}`"""
    review: ReviewInput


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class RegisterInput(BaseModel):
    email: str
    username: str
    password: str

    @field_validator("email", "username", mode="before")
    @classmethod
    def _text(cls, value: Any, info: ValidationInfo) -> Any:
        return _required_text(value, info.field_name)

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        local, _, domain = value.partition("@")
        if not local or "." not in domain or " " in value:
            raise PydanticCustomError("email", "Email must be a valid email address")
        return value.lower()

    @field_validator("password", mode="before")
    @classmethod
    def _password(cls, value: Any, info: ValidationInfo) -> Any:
        return _blank_is_missing(value, info.field_name)


class LoginInput(BaseModel):
    username: str
    password: str

    @field_validator("username", "password", mode="before")
    @classmethod
    def _present(cls, value: Any, info: ValidationInfo) -> Any:
        return _blank_is_missing(value, info.field_name)


# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------

_TYPE_MESSAGES = {
    "missing": "{label} is required",
    "string_type": "{label} must be a string",
    "float_parsing": "{label} must be a number",
    "float_type": "{label} must be a number",
    "int_parsing": "{label} must be a number",
    "int_type": "{label} must be a number",
    "int_from_float": "{label} must be a whole number",
    "finite_number": "{label} must be a finite number",
    "list_type": "{label} must be a list",
    "model_type": "{label} must be an object",
    "dict_type": "{label} must be an object",
}


def _field_of(loc: Tuple[Any, ...]) -> str:
    for part in reversed(loc):
        if isinstance(part, str):
            return part
    return ""


def error_messages(errors: Iterable[Dict[str, Any]]) -> List[str]:
    """
    Turn pydantic error dicts (from ValidationError.errors() or FastAPI's
    RequestValidationError.errors()) into display messages, dropping
    duplicates while keeping order.
    """
    messages: List[str] = []
    for err in errors:
        loc = tuple(err.get("loc") or ())
        # FastAPI prefixes the request part ("body", "query", ...)
        if loc and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        field = _field_of(loc)
        template = _TYPE_MESSAGES.get(err.get("type", ""))

        if template and field:
            message = template.format(label=_label(field))
        elif not field and err.get("type") in ("model_type", "dict_type", "model_attributes_type"):
            message = "Request body must be an object"
        else:
            message = err.get("msg") or "Invalid value"

        if message not in messages:
            messages.append(message)
    return messages


def validate_payload(model: Type[M], data: Any) -> M:
    """Validate `data` against `model`, raising ValidationFailedError on failure."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ValidationFailedError(error_messages(e.errors())) from e


# ---------------------------------------------------------------------------
# Form bodies
# ---------------------------------------------------------------------------

def nest_form_fields(items: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """
    Rebuild the nested body shape from bracketed form keys.

        campground[title]=T, deleteImages[]=a, deleteImages[]=b
        -> {"campground": {"title": "T"}, "deleteImages": ["a", "b"]}

    Keys ending in `[]` (or repeated plain keys) collect into lists.
    """
    nested: Dict[str, Any] = {}
    for key, value in items:
        if key.endswith("[]"):
            nested.setdefault(key[:-2], []).append(value)
            continue

        match = _NESTED_KEY.match(key)
        if match:
            group = nested.setdefault(match.group("root"), {})
            if isinstance(group, dict):
                group[match.group("field")] = value
            continue

        if key in nested:
            existing = nested[key]
            nested[key] = existing + [value] if isinstance(existing, list) else [existing, value]
        else:
            nested[key] = value
    return nested
