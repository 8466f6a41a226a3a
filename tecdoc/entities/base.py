"""
Shared behaviour for catalog entities.

An entity is built eagerly from one canonical record and keeps the catalog and
the scope (lang / country) it was found with, so derived data about itself can
be requested later. Derived data is declared with ``memoized``: computed on
first access, cached for the lifetime of the instance, never invalidated.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

from tecdoc.contracts.interfaces import CanonicalRecord

if TYPE_CHECKING:
    from tecdoc.catalog import Catalog

T = TypeVar("T")
E = TypeVar("E", bound="CatalogEntity")

_MEMO = "_memoized_values"
_LOCK = "_memoized_lock"


class memoized(Generic[T]):
    """Compute-once property.

    The first access runs the getter under a per-instance reentrant lock, so
    concurrent first accesses issue one request. A getter that raises caches
    nothing and is run again on the next access.
    """

    def __init__(self, func: Callable[[Any], T]) -> None:
        self.func = func
        self.name = func.__name__
        self.__doc__ = func.__doc__

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        values = _memo_values(instance)
        if self.name in values:
            return values[self.name]
        with _memo_lock(instance):
            if self.name not in values:
                values[self.name] = self.func(instance)
            return values[self.name]


def is_memoized(instance: Any, name: str) -> bool:
    return name in _memo_values(instance)


def _memo_values(instance: Any) -> Dict[str, Any]:
    # dict.setdefault is atomic, so two threads always share the same store
    return instance.__dict__.setdefault(_MEMO, {})


def _memo_lock(instance: Any) -> threading.RLock:
    return instance.__dict__.setdefault(_LOCK, threading.RLock())


class CatalogEntity:
    """Base class giving entities access to their catalog and scope."""

    catalog: Optional["Catalog"] = None
    scope: Mapping[str, Any] = MappingProxyType({})

    def bind(self: E, catalog: Optional["Catalog"], scope: Optional[Mapping[str, Any]] = None) -> E:
        """Attach the catalog and scope used for this entity's lazy requests."""
        self.catalog = catalog
        self.scope = dict(scope or {})
        return self

    @property
    def lang(self) -> Optional[str]:
        return self.scope.get("lang")

    @property
    def country(self) -> Optional[str]:
        return self.scope.get("country")

    def _require_catalog(self) -> "Catalog":
        if self.catalog is None:
            raise RuntimeError(f"{type(self).__name__} is not bound to a catalog")
        return self.catalog

    def request(self, operation: str, params: Mapping[str, Any]) -> List[CanonicalRecord]:
        return self._require_catalog().request(operation, params)
