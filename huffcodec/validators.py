"""
validators.py

Shared argument checks for huffcodec. Every check raises ValueError so that
callers can treat bad arguments uniformly.
"""


import os
from typing import Any

_BIT_CHARS = frozenset("01")


def validate_type(variable: Any, name: str, expected_type: type) -> None:
    """Validate that variable is of the expected type."""
    if not isinstance(variable, expected_type):
        raise ValueError(f"{name} must be of type {expected_type.__name__}")


def validate_non_negative_int(variable: Any, name: str) -> None:
    """Validate that variable is an int (not a bool) and not below zero."""
    if isinstance(variable, bool) or not isinstance(variable, int):
        raise ValueError(f"{name} must be of type int")
    if variable < 0:
        raise ValueError(f"{name} must be non-negative")


def validate_bit_string(bits: Any, name: str = "Bits") -> None:
    """Validate that bits is a str made only of '0' and '1'."""
    validate_type(bits, name, str)
    if not _BIT_CHARS.issuperset(bits):
        raise ValueError(f"{name} must contain only '0' and '1'")


def validate_file_exists(file_path: str) -> None:
    """Validate that the given file path exists."""
    if not os.path.exists(file_path):
        raise ValueError(f"File does not exist: {file_path}")
