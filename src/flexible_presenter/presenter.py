"""Flexible presenter: turn records, collections and pages into plain data.

A concrete presenter declares its fields in ``values()``. Callers narrow the
output with ``only()``/``except_()``, add computed keys with ``with_()`` and
apply named ``preset()`` configurations before calling ``get()``.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping, Sequence, Set
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from .fields import ResolutionContext, as_field, to_plain
from .pagination import BasePaginator
from .presets import collect_presets
from .utils.errors import InvalidPresenterKeys, InvalidPresenterPreset
from .utils.logging import get_logger
from .utils.merge import deep_merge

logger = get_logger("presenter")

_MISSING = object()

WithCallback = Callable[[Any], Mapping]


class SourceKind(str, Enum):
    """What a presenter instance wraps."""
    ABSENT = "absent"
    ITEM = "item"
    SEQUENCE = "sequence"
    PAGINATED = "paginated"


class FlexiblePresenter(ABC):
    """Base class for presenters."""

    _presets: Dict[str, str] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._presets = collect_presets(cls)

    def __init__(self, data: Any = _MISSING):
        self.resource: Any = None
        self.collection: Optional[List[Any]] = None
        self.pagination: Optional[BasePaginator] = None

        if data is _MISSING:
            self.kind = SourceKind.ABSENT
        elif isinstance(data, BasePaginator):
            self.kind = SourceKind.PAGINATED
            self.pagination = data
        elif isinstance(data, (list, tuple)):
            self.kind = SourceKind.SEQUENCE
            self.collection = list(data)
        else:
            self.kind = SourceKind.ITEM
            self.resource = data

        self.include_keys: List[str] = []
        self.exclude_keys: List[str] = []
        self.supplemental: Dict[str, Any] = {}
        self.appended: Dict[str, Any] = {}
        self.params: Dict[str, Any] = {}
        self._with_callbacks: List[WithCallback] = []

        logger.debug(f"{type(self).__name__} wraps {self.kind.value} source")

    @classmethod
    def make(cls, resource: Any) -> "FlexiblePresenter":
        """Present a single item (None resolves to no data), even one that is a tuple."""
        return cls._for_item(resource)

    @classmethod
    def _for_item(cls, item: Any) -> "FlexiblePresenter":
        presenter = cls()
        presenter.kind = SourceKind.ITEM
        presenter.resource = item
        return presenter

    @classmethod
    def collection(cls, collection: Any) -> "FlexiblePresenter":
        """Present a sequence or a paginator (None resolves to no data)."""
        if collection is None:
            return cls()
        return cls(_wrap(collection))

    @classmethod
    def new(cls) -> "FlexiblePresenter":
        """Create a presenter that wraps nothing."""
        return cls()

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes missing on the presenter itself.
        resource = self.__dict__.get("resource")
        if name.startswith("__") or resource is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        return getattr(resource, name)

    @abstractmethod
    def values(self) -> Mapping[str, Any]:
        """Return the ordered catalog of output keys for the current item."""

    # Selection

    def only(self, *keys: Union[str, Iterable[str]]) -> "FlexiblePresenter":
        """Restrict catalog keys to the given ones (accumulates across calls)."""
        _extend_unique(self.include_keys, _flatten(keys))
        return self

    def force_only(self, *keys: Union[str, Iterable[str]]) -> "FlexiblePresenter":
        """Replace any previously given only() keys."""
        self.include_keys = []
        return self.only(*keys)

    def except_(self, *keys: Union[str, Iterable[str]]) -> "FlexiblePresenter":
        """Remove the given catalog keys (accumulates across calls)."""
        _extend_unique(self.exclude_keys, _flatten(keys))
        return self

    def force_except(self, *keys: Union[str, Iterable[str]]) -> "FlexiblePresenter":
        """Replace any previously given except_() keys."""
        self.exclude_keys = []
        return self.except_(*keys)

    def with_(self, callback: WithCallback) -> "FlexiblePresenter":
        """
        Add supplemental keys computed from the item.

        The callback receives the item and returns a mapping of extra keys.
        For collections and pages it is called once per element later on.
        """
        if self.kind is SourceKind.ITEM and self.resource is not None:
            self.supplemental.update(callback(self.resource))
        else:
            self._with_callbacks.append(callback)
        return self

    def preset(self, name: str) -> "FlexiblePresenter":
        """Apply the preset registered under ``name``."""
        method_name = self._presets.get(name)
        if method_name is None:
            raise InvalidPresenterPreset.preset_not_found(name, type(self).__name__)

        logger.debug(f"Applying preset '{name}' on {type(self).__name__}")
        getattr(self, method_name)()
        return self

    def appends(self, values: Mapping[str, Any]) -> "FlexiblePresenter":
        """Set extra top-level keys merged into paginated output."""
        self.appended = dict(values)
        return self

    def using(self, **params: Any) -> "FlexiblePresenter":
        """Add parameters to the context handed to deferred producers."""
        self.params.update(params)
        return self

    def when_loaded(self, relationship: str, resource: Any = None) -> Any:
        """
        Return a relationship only if it is already loaded.

        ``resource`` defaults to the presented item; with_() callbacks that
        run per element should pass the element they receive.
        """
        if resource is None:
            resource = self.resource
        relation_loaded = getattr(resource, "relation_loaded", None)
        if relation_loaded is None:
            raise TypeError(
                f"{type(resource).__name__} does not support relation_loaded()"
            )
        if not relation_loaded(relationship):
            return None
        return getattr(resource, relationship)

    # Resolution

    def get(self) -> Union[Dict[str, Any], List[Any], None]:
        """Resolve the presenter into plain data, or None when there is nothing to present."""
        if self.kind is SourceKind.ABSENT:
            return None
        if self.kind is SourceKind.SEQUENCE:
            return self._build_collection(self.collection)
        if self.kind is SourceKind.PAGINATED:
            return self._build_pagination()
        if self.resource is None:
            return None

        catalog = self.values()
        self._validate_keys(catalog)

        selected = {
            key: value
            for key, value in catalog.items()
            if (not self.include_keys or key in self.include_keys)
            and key not in self.exclude_keys
        }
        selected.update(self.supplemental)

        return self._resolve(selected)

    def all(self) -> Union[Dict[str, Any], List[Any], None]:
        """Resolve every catalog key, ignoring selection and supplemental keys."""
        if self.kind is SourceKind.SEQUENCE:
            return [self._for_item(item).all() for item in self.collection]
        if self.kind is SourceKind.PAGINATED:
            return [self._for_item(item).all() for item in self.pagination.items]
        if self.resource is None:
            return None
        return self._resolve(self.values())

    def to_plain_data(self) -> Union[Dict[str, Any], List[Any], None]:
        return self.get()

    def _resolve(self, values: Mapping[str, Any]) -> Dict[str, Any]:
        context = ResolutionContext(presenter=self, resource=self.resource, params=dict(self.params))
        return {
            key: to_plain(as_field(value).resolve(context))
            for key, value in values.items()
        }

    def _validate_keys(self, catalog: Mapping[str, Any]) -> None:
        valid_keys = set(catalog) | set(self.supplemental)

        for method, keys in (("only", self.include_keys), ("except_", self.exclude_keys)):
            invalid_keys = [key for key in keys if key not in valid_keys]
            if invalid_keys:
                raise InvalidPresenterKeys.keys_not_defined(invalid_keys, method)

    # Fanout

    def _present_item(self, item: Any) -> Optional[Dict[str, Any]]:
        presenter = self._for_item(item)
        presenter.include_keys = list(self.include_keys)
        presenter.exclude_keys = list(self.exclude_keys)
        presenter.params = dict(self.params)
        for callback in self._with_callbacks:
            presenter.with_(callback)
        return presenter.get()

    def _build_collection(self, items: List[Any]) -> List[Any]:
        logger.debug(f"{type(self).__name__} presenting {len(items)} items")
        return [self._present_item(item) for item in items]

    def _build_pagination(self) -> Dict[str, Any]:
        page = self.pagination.with_items(self._build_collection(self.pagination.items))
        return deep_merge(page.to_plain_data(), self.appended)


def _flatten(keys: Iterable[Any]) -> List[str]:
    flat: List[str] = []
    for key in keys:
        if isinstance(key, str):
            flat.append(key)
        else:
            flat.extend(_flatten(key))
    return flat


def _extend_unique(target: List[str], keys: List[str]) -> None:
    for key in keys:
        if key not in target:
            target.append(key)


def _wrap(collection: Any) -> Any:
    """Turn whatever was passed to collection() into a list or paginator."""
    if isinstance(collection, (BasePaginator, list)):
        return collection
    if isinstance(collection, (str, bytes)):
        return [collection]
    if isinstance(collection, (Sequence, Set, Iterator)):
        return list(collection)
    return [collection]
