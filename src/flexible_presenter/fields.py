"""Catalog entries and plain-data conversion.

A presenter catalog maps output keys to values. A value is either eager
(already computed) or deferred (computed only when its key is selected).
Deferred producers that need more than a closure receive an explicit
``ResolutionContext`` instead of having arguments injected by inspection.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .presenter import FlexiblePresenter


@runtime_checkable
class PlainDataConvertible(Protocol):
    """Anything that can turn itself into plain nested data."""

    def to_plain_data(self) -> Any:
        ...


@dataclass(frozen=True)
class ResolutionContext:
    """Values handed to context-aware deferred producers."""
    presenter: "FlexiblePresenter"
    resource: Any
    params: Dict[str, Any] = field(default_factory=dict)

    def param(self, key: str, default: Optional[Any] = None) -> Any:
        """Look up a parameter passed through FlexiblePresenter.using()."""
        return self.params.get(key, default)


@dataclass(frozen=True)
class Eager:
    """Catalog entry holding an already computed value."""
    value: Any

    def resolve(self, context: ResolutionContext) -> Any:
        return self.value


@dataclass(frozen=True)
class Deferred:
    """Catalog entry computed on demand.

    ``producer`` is called with no arguments, or with the resolution context
    when ``with_context`` is set.
    """
    producer: Callable[..., Any]
    with_context: bool = False

    def resolve(self, context: ResolutionContext) -> Any:
        if self.with_context:
            return self.producer(context)
        return self.producer()


def lazy(producer: Callable[..., Any], with_context: bool = False) -> Deferred:
    """Mark a catalog value as deferred."""
    return Deferred(producer, with_context=with_context)


def as_field(value: Any):
    """Normalize a raw catalog value into an Eager or Deferred entry."""
    if isinstance(value, (Eager, Deferred)):
        return value
    return Eager(value)


def to_plain(value: Any) -> Any:
    """
    Recursively convert a resolved value into plain data.

    Objects implementing ``to_plain_data()`` (presenters, paginators) are
    converted first and their result is walked as well; mappings become dicts
    and lists/tuples become lists. Everything else is returned unchanged.
    """
    if isinstance(value, PlainDataConvertible):
        value = value.to_plain_data()

    if isinstance(value, Mapping):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value
