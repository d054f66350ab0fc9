"""
Generally useful stuff that doesn't fit anywhere else
"""

from collections.abc import Callable
import math
from typing import TypeVar

T = TypeVar("T")


def maybe(dangerous: Callable[[], T]) -> T | None:
    """
    Executes a callable (function, lambda, etc.) and returns the result. If the callable raises an exception, the
    exception is caught and discarded, and None is returned.
    """
    try:
        return dangerous()
    except Exception:  # pylint: disable=broad-exception-caught
        return None


def is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)
