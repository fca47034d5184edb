"""Page slicing and cooperative-cancellation streaming."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, TypeVar

import structlog

from modules.products.constants import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE

T = TypeVar("T")

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PageRequest:
    """A 1-based page of at most ``page_size`` records."""

    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def normalize(cls, page_number: int, page_size: int) -> PageRequest:
        """Replace non-positive values with the defaults (page 1, size 10)."""
        return cls(
            page_number=page_number if page_number > 0 else DEFAULT_PAGE_NUMBER,
            page_size=page_size if page_size > 0 else DEFAULT_PAGE_SIZE,
        )

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def stream_page(
    records: Iterable[T],
    is_cancelled: Callable[[], bool],
    operation: str = "stream",
) -> Iterator[T]:
    """Yield ``records`` one by one, checking ``is_cancelled`` before each.

    Cancellation ends the stream quietly: whatever was already yielded is
    the complete response.
    """
    sent = 0
    for record in records:
        if is_cancelled():
            logger.warning(f"{operation}.cancelled", sent=sent)
            return
        yield record
        sent += 1
    logger.info(f"{operation}.completed", sent=sent)
