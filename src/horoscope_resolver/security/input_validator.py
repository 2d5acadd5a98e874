"""
Input validation and sanitization for inbound resolution requests.
"""

import re
from typing import Any, Dict, Optional

from .exceptions import ValidationError

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class InputValidator:
    """
    Validates and sanitizes request payloads before they reach the resolver.

    The resolver itself tolerates any text; this only bounds what callers
    can send over the wire.
    """

    MAX_FIELD_LENGTH = 200

    PROFILE_FIELDS = (
        "primarySign", "primary_sign",
        "secondarySign", "secondary_sign",
        "cuspName", "cusp_name",
        "preferredSign", "preferred_sign",
        "hemisphere",
        "userId", "user_id", "id",
        "email",
    )

    @staticmethod
    def sanitize_text(value: Any, field_name: str) -> Optional[str]:
        """
        Sanitize one free-text field.

        :return: Stripped text without control characters, or None when empty
        :raises ValidationError: If the value is not a string or too long
        """
        if value is None:
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            raise ValidationError(f"'{field_name}' must be a string")
        if len(value) > InputValidator.MAX_FIELD_LENGTH:
            raise ValidationError(
                f"'{field_name}' exceeds maximum length of {InputValidator.MAX_FIELD_LENGTH} characters"
            )
        cleaned = _CONTROL_CHARS.sub("", value).strip()
        return cleaned or None

    @staticmethod
    def validate_profile(payload: Any) -> Dict[str, Any]:
        """
        Validate a profile object.

        Unknown keys are dropped; a nested ``cuspResult`` / ``cusp_result``
        object is validated the same way.

        :raises ValidationError: If the payload is not an object or a field is invalid
        """
        if not isinstance(payload, dict):
            raise ValidationError("'profile' must be an object")

        profile: Dict[str, Any] = {}
        for key in InputValidator.PROFILE_FIELDS:
            if key in payload:
                value = InputValidator.sanitize_text(payload[key], key)
                if value is not None:
                    profile[key] = value

        for nested_key in ("cuspResult", "cusp_result"):
            if nested_key in payload and payload[nested_key] is not None:
                profile[nested_key] = InputValidator.validate_profile(payload[nested_key])

        return profile

    @staticmethod
    def validate_date(value: Any) -> Optional[str]:
        """
        Validate an optional YYYY-MM-DD date.

        :raises ValidationError: If present and not in that format
        """
        if value is None or value == "":
            return None
        if not isinstance(value, str) or not _DATE_PATTERN.match(value.strip()):
            raise ValidationError("'date' must be a YYYY-MM-DD string")
        return value.strip()

    @staticmethod
    def validate_flag(value: Any, field_name: str) -> Optional[bool]:
        """
        Validate an optional boolean flag.

        :raises ValidationError: If present and not a boolean
        """
        if value is None:
            return None
        if not isinstance(value, bool):
            raise ValidationError(f"'{field_name}' must be true or false")
        return value
