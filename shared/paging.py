"""
Paging and sorting types shared by the repositories.

A PageRequest says which slice of an ordered result to read. A Page carries
that slice together with the total row count, from which the page metadata
(total pages, first/last, next/previous) is derived.
"""

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Tuple, TypeVar

from shared.exceptions import InvalidPaging

T = TypeVar("T")
R = TypeVar("R")

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class Order:
    property: str
    direction: str = ASC

    def __post_init__(self):
        if self.direction not in (ASC, DESC):
            raise InvalidPaging(f"Invalid sort direction '{self.direction}', expected '{ASC}' or '{DESC}'")

    @classmethod
    def asc(cls, property: str) -> "Order":
        return cls(property, ASC)

    @classmethod
    def desc(cls, property: str) -> "Order":
        return cls(property, DESC)

    @classmethod
    def parse(cls, value: str) -> "Order":
        """Parse ``"field"`` or ``"field,asc|desc"`` as sent in a query string."""
        prop, _, direction = value.partition(",")
        prop = prop.strip()
        if not prop:
            raise InvalidPaging("Sort property must not be empty")
        return cls(prop, (direction.strip() or ASC).lower())


@dataclass(frozen=True)
class PageRequest:
    page: int
    size: int
    sort: Tuple[Order, ...] = ()

    def __post_init__(self):
        if self.page < 0:
            raise InvalidPaging("Page index must not be less than zero")
        if self.size < 1:
            raise InvalidPaging("Page size must not be less than one")

    @classmethod
    def of(cls, page: int, size: int, *orders: Order) -> "PageRequest":
        return cls(page=page, size=size, sort=tuple(orders))

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    content: List[T]
    page_request: PageRequest
    total_elements: int
    _total_pages: int = field(init=False, repr=False)

    def __post_init__(self):
        self._total_pages = math.ceil(self.total_elements / self.page_request.size)

    @property
    def number(self) -> int:
        return self.page_request.page

    @property
    def size(self) -> int:
        return self.page_request.size

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0

    def map(self, converter: Callable[[T], R]) -> "Page[R]":
        return Page([converter(item) for item in self.content], self.page_request, self.total_elements)

    def __iter__(self):
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)
