"""
Predicates for common checks on interactions.
"""

from typing import Any, Optional

from ..models.interaction import Interaction

STATUS_ACCEPTED = 202
STATUS_NOT_FOUND = 404


def has_method(interaction: Interaction, method: str) -> bool:
    """Check the request method. Methods are case-sensitive tokens."""
    return interaction.method == method


def has_any_method(interaction: Interaction, *methods: str) -> bool:
    return interaction.method in methods


def was_successful(interaction: Interaction) -> bool:
    """Check for a 2xx response status."""
    return 200 <= interaction.status_code < 300


def has_status(interaction: Interaction, status_code: int) -> bool:
    return interaction.status_code == status_code


def response_header(interaction: Interaction, name: str) -> Optional[str]:
    """Return a response header value, treating an empty value as absent."""
    value = interaction.response.header(name)
    return value or None


def json_field(document: Any, *path: str) -> Optional[str]:
    """
    Walk a decoded JSON document and return a non-empty string leaf.

    Args:
        document: Decoded JSON (any type)
        *path: Object keys to follow

    Returns:
        The string at the end of the path, or None if any step is missing,
        the leaf is not a string, or the leaf is empty.

    Examples:
        >>> json_field({"properties": {"provisioningState": "Creating"}},
        ...            "properties", "provisioningState")
        'Creating'
    """
    current = document
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    if isinstance(current, str) and current:
        return current
    return None


def provisioning_state(interaction: Interaction) -> Optional[str]:
    """Return ``properties.provisioningState`` from the response body, if present."""
    return json_field(interaction.response.json(), "properties", "provisioningState")


def operation_status(interaction: Interaction) -> Optional[str]:
    """Return the top-level ``status`` of an operation response body, if present."""
    return json_field(interaction.response.json(), "status")
