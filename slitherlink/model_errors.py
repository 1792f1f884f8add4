"""
Model errors and configuration.
"""

from __future__ import annotations

import os

ENFORCE_MASK_ENV = "SLITHERLINK_ENFORCE_MASK"
DEFAULT_ENFORCE_MASK = False

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class InvalidPuzzleDefinitionError(ValueError):
    """
    Raised when a puzzle definition is not a non-empty square grid of
    required counts in -1..4.
    """

    def __init__(
        self,
        message: str,
        *,
        row: int | None = None,
        col: int | None = None,
        value: object = None,
    ) -> None:
        super().__init__(message)
        self.row = row
        self.col = col
        self.value = value


def resolve_enforce_mask(explicit: bool | None = None) -> bool:
    """
    Resolve whether toggles must respect the eligibility mask.

    Priority:
    1) explicit argument
    2) env SLITHERLINK_ENFORCE_MASK
    3) DEFAULT_ENFORCE_MASK
    """
    if explicit is not None:
        return bool(explicit)

    raw = os.getenv(ENFORCE_MASK_ENV)
    if raw is None:
        return DEFAULT_ENFORCE_MASK

    token = raw.strip().lower()
    if token in _TRUTHY:
        return True
    if token in _FALSY:
        return False
    return DEFAULT_ENFORCE_MASK
