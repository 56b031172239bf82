"""
Input validation functions.
"""

import re

VOLUME_NAME_PATTERN = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9_.-]*")


def validate_name(name: str) -> None:
    """
    Validate a volume name.

    Volume names become a single path component under the driver root, so
    separators and relative components are rejected.

    Args:
        name: Name to validate

    Raises:
        ValueError: If name is invalid
    """
    if not name:
        raise ValueError("Name cannot be empty")

    if len(name) > 255:
        raise ValueError("Name must be between 1 and 255 characters")

    if not VOLUME_NAME_PATTERN.fullmatch(name):
        raise ValueError(
            "Name must start with alphanumeric and contain only alphanumeric, dots, underscores, or hyphens"
        )


def parse_bool(value: str) -> bool:
    """
    Interpret a volume option flag.

    Docker passes `-o asap` as an empty string, so a bare flag means true and
    only an explicit negative turns it off.

    Args:
        value: Raw option value

    Returns:
        Parsed boolean
    """
    return value.strip().lower() not in ("0", "false", "no", "off")
