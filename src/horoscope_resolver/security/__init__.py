"""
Security module: validation of inbound request payloads.
"""

from .exceptions import SecurityError, ValidationError
from .input_validator import InputValidator

__all__ = [
    "SecurityError",
    "ValidationError",
    "InputValidator",
]
