"""
User registration form.

The form is described declaratively: ordered fields, each with the input
filters and validators a form renderer needs. ``validate_registration``
applies the same rules to submitted data with pydantic.

The CAPTCHA field is only part of the form when ``[registration].captcha``
is on, and the hidden ``redirect`` field takes its value from the request
query string.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from sitekit.core.config import Config
from sitekit.models.base import ToDictMixin
from sitekit.services.base import ServiceResult

IDENTITY_PATTERN = r"^[a-zA-Z0-9]+$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

DEFAULT_BOUNDS = {
    "identity_min": 3,
    "identity_max": 32,
    "name_min": 3,
    "name_max": 32,
    "credential_min": 5,
    "credential_max": 32,
}


@dataclass
class FormField(ToDictMixin):
    """One form element with its input filters and validators."""

    name: str
    type: str
    label: str = ""
    required: bool = False
    value: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    filters: List[Dict[str, Any]] = field(default_factory=list)
    validators: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class FormDefinition(ToDictMixin):
    """An ordered set of form fields."""

    name: str
    action: str
    method: str = "post"
    fields: List[FormField] = field(default_factory=list)
    bounds: Dict[str, int] = field(default_factory=dict)

    def get(self, name: str) -> Optional[FormField]:
        return next((f for f in self.fields if f.name == name), None)

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


def _safe_redirect(value: Optional[str]) -> str:
    # Local paths only
    if not value or not value.startswith("/") or value.startswith("//"):
        return ""
    return value


def build_registration_form(
    config: Optional[Config] = None,
    query: Optional[Mapping[str, str]] = None,
) -> FormDefinition:
    """
    Describe the registration form.

    Args:
        config: Configuration; defaults to the global config
        query: Request query parameters

    Returns:
        FormDefinition with identity, email, name, credential,
        credential-confirm, optional captcha, redirect and submit fields
    """
    if config is None:
        from sitekit.core.config import get_config

        config = get_config()
    settings = config.registration
    bounds = {key: int(settings.get(key, default)) for key, default in DEFAULT_BOUNDS.items()}
    query = query or {}
    trim = [{"name": "trim"}]

    fields = [
        FormField(
            name="identity",
            type="text",
            label="Username",
            required=True,
            filters=trim,
            validators=[
                {"name": "length", "min": bounds["identity_min"], "max": bounds["identity_max"]},
                {"name": "regex", "pattern": IDENTITY_PATTERN},
            ],
        ),
        FormField(
            name="email",
            type="email",
            label="Email address",
            required=True,
            filters=trim,
            validators=[{"name": "email"}],
        ),
        FormField(
            name="name",
            type="text",
            label="Display name",
            required=True,
            filters=trim,
            validators=[
                {"name": "length", "min": bounds["name_min"], "max": bounds["name_max"]},
            ],
        ),
        FormField(
            name="credential",
            type="password",
            label="Password",
            required=True,
            validators=[
                {
                    "name": "length",
                    "min": bounds["credential_min"],
                    "max": bounds["credential_max"],
                },
            ],
        ),
        FormField(
            name="credential-confirm",
            type="password",
            label="Confirm password",
            required=True,
            validators=[{"name": "identical", "token": "credential"}],
        ),
    ]

    if settings.get("captcha"):
        fields.append(
            FormField(name="captcha", type="captcha", label="Please type the word.", required=True)
        )

    fields.append(
        FormField(name="redirect", type="hidden", value=_safe_redirect(query.get("redirect")))
    )
    fields.append(FormField(name="submit", type="submit", attributes={"value": "Register"}))

    return FormDefinition(name="register", action="/user/register", fields=fields, bounds=bounds)


def _check_length(value: str, info: ValidationInfo, key: str) -> str:
    bounds = (info.context or {}).get("bounds", DEFAULT_BOUNDS)
    low, high = bounds[f"{key}_min"], bounds[f"{key}_max"]
    if not low <= len(value) <= high:
        raise ValueError(f"must be between {low} and {high} characters long")
    return value


class RegistrationInput(BaseModel):
    """Submitted registration data; length bounds come from the validation context."""

    model_config = ConfigDict(populate_by_name=True)

    identity: str
    email: str
    name: str
    credential: str
    credential_confirm: str = Field(alias="credential-confirm")
    captcha: Optional[str] = None
    redirect: Optional[str] = None

    @field_validator("identity")
    @classmethod
    def validate_identity(cls, v: str, info: ValidationInfo) -> str:
        _check_length(v, info, "identity")
        if not re.match(IDENTITY_PATTERN, v):
            raise ValueError("may only contain letters and digits")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("is not a valid email address")
        return v.lower()

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str, info: ValidationInfo) -> str:
        return _check_length(v, info, "name")

    @field_validator("credential")
    @classmethod
    def validate_credential(cls, v: str, info: ValidationInfo) -> str:
        return _check_length(v, info, "credential")

    @field_validator("credential_confirm")
    @classmethod
    def validate_confirm(cls, v: str, info: ValidationInfo) -> str:
        if "credential" in info.data and v != info.data["credential"]:
            raise ValueError("does not match the password")
        return v

    @field_validator("redirect")
    @classmethod
    def validate_redirect(cls, v: Optional[str]) -> str:
        return _safe_redirect(v)


def validate_registration(
    data: Mapping[str, Any],
    form: Optional[FormDefinition] = None,
) -> ServiceResult[RegistrationInput]:
    """
    Filter and validate submitted registration data.

    Args:
        data: Submitted values keyed by field name
        form: Form description; built from the global config when omitted

    Returns:
        ServiceResult containing RegistrationInput; on failure the messages
        keyed by field name are in ``metadata["errors"]``
    """
    form = form or build_registration_form()
    values: Dict[str, Any] = {}
    for form_field in form.fields:
        if form_field.type == "submit" or form_field.name not in data:
            continue
        value = data[form_field.name]
        if isinstance(value, str) and any(f["name"] == "trim" for f in form_field.filters):
            value = value.strip()
        values[form_field.name] = value

    errors: Dict[str, str] = {}
    if "captcha" in form and not values.get("captcha"):
        errors["captcha"] = "is required"

    try:
        registration = RegistrationInput.model_validate(values, context={"bounds": form.bounds})
    except ValidationError as e:
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else "form"
            message = error["msg"]
            if error["type"] == "missing":
                message = "is required"
            else:
                message = message.removeprefix("Value error, ")
            errors.setdefault(name, message)
        registration = None

    if errors:
        return ServiceResult.fail(
            f"Invalid registration: {', '.join(sorted(errors))}",
            errors=errors,
        )
    return ServiceResult.ok(data=registration, message="Registration data is valid")
