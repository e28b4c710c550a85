"""Form descriptions and input validation."""

from .registration import (
    FormDefinition,
    FormField,
    RegistrationInput,
    build_registration_form,
    validate_registration,
)

__all__ = [
    "FormDefinition",
    "FormField",
    "RegistrationInput",
    "build_registration_form",
    "validate_registration",
]
