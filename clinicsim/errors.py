# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# errors.py
# -----------------------------------------------------------------------------
# Purpose:
#   Error type for malformed scenario parameters plus small validation
#   helpers shared by both engines.
#
# Design notes:
#   - Validation always runs before the first random draw, so a bad call
#     never produces partial trial results.
#   - Empty queues, zero-arrival days and all-dropout trials are normal
#     outcomes and never raise.
#
# Usage:
#   from clinicsim.errors import InvalidParameter, require_positive
# -----------------------------------------------------------------------------

from __future__ import annotations
import math


class InvalidParameter(ValueError):
    """Raised when a scenario parameter is outside its valid domain."""


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def require_positive(name: str, value) -> float:
    if not _is_number(value) or value <= 0:
        raise InvalidParameter(f"{name} must be a positive number, got {value!r}")
    return value


def require_non_negative(name: str, value) -> float:
    if not _is_number(value) or value < 0:
        raise InvalidParameter(f"{name} must be a non-negative number, got {value!r}")
    return value


def require_positive_int(name: str, value) -> int:
    if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
        raise InvalidParameter(f"{name} must be a positive integer, got {value!r}")
    return value
