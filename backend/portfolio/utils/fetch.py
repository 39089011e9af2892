from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError


logger = logging.getLogger(__name__)

T = TypeVar("T")

# errors a page survives by showing its fallback content
RECOVERABLE_ERRORS = (SQLAlchemyError, ValidationError, ValueError, LookupError, OSError)


@dataclass
class FetchResult(Generic[T]):
    value: T
    error: Optional[str] = None
    used_fallback: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


def fetch_or_fallback(loader: Callable[[], T], fallback: T, what: str) -> FetchResult[T]:
    """Run ``loader``; on a recoverable error log it and return ``fallback``."""
    try:
        return FetchResult(value=loader())
    except RECOVERABLE_ERRORS as exc:
        logger.warning("fetch %s failed, using fallback: %s", what, exc)
        return FetchResult(value=fallback, error=str(exc) or exc.__class__.__name__, used_fallback=True)
