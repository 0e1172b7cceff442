"""flexible_presenter - Present records, collections and pages as plain data."""

from .fields import Deferred, Eager, PlainDataConvertible, ResolutionContext, lazy, to_plain
from .pagination import BasePaginator, LengthAwarePaginator, Paginator, paginate
from .presenter import FlexiblePresenter, SourceKind
from .presets import register_preset
from .utils.errors import (
    FlexiblePresenterError,
    InvalidPresenterKeys,
    InvalidPresenterPreset,
)

__version__ = "0.1.0"

__all__ = [
    "FlexiblePresenter",
    "SourceKind",
    "register_preset",
    "lazy",
    "Eager",
    "Deferred",
    "ResolutionContext",
    "PlainDataConvertible",
    "to_plain",
    "BasePaginator",
    "Paginator",
    "LengthAwarePaginator",
    "paginate",
    "FlexiblePresenterError",
    "InvalidPresenterKeys",
    "InvalidPresenterPreset",
]
