"""Fixed-size pagination over entry lists."""

from typing import Generic, List, Sequence, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 8


class Page(BaseModel, Generic[T]):
    """One slice of a list plus which navigation controls are valid."""

    items: List[T]
    index: int
    has_prev: bool
    has_next: bool


def paginate(items: Sequence[T], page_index: int, page_size: int = DEFAULT_PAGE_SIZE) -> Page[T]:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    if page_index < 0:
        raise ValueError("page_index must not be negative")
    start = page_index * page_size
    return Page(
        items=list(items[start : start + page_size]),
        index=page_index,
        has_prev=page_index > 0,
        has_next=(page_index + 1) * page_size < len(items),
    )


def page_count(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages needed for ``total`` items (at least one)."""
    return max(1, -(-total // page_size))
