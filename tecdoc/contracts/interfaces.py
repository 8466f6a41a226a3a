from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Raw response tree
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawNode:
    """One element of a response tree as handed over by a transport.

    ``children`` holds element children only, in document order. ``text`` is
    the element's own text and is only meaningful for leaves.
    """

    name: str
    children: Tuple["RawNode", ...] = ()
    text: Optional[str] = None

    @classmethod
    def leaf(cls, name: str, text: Optional[str] = None) -> "RawNode":
        return cls(name=name, text=text)

    @classmethod
    def branch(cls, name: str, *children: "RawNode") -> "RawNode":
        return cls(name=name, children=tuple(children))

    def child_named(self, name: str) -> Optional["RawNode"]:
        for child in self.children:
            if child.name == name:
                return child
        return None


# ---------------------------------------------------------------------------
# Canonical values
# ---------------------------------------------------------------------------

class CanonicalRecord(Mapping[str, "CanonicalValue"]):
    """Read-only mapping of snake_case field names to canonical values."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Optional[Mapping[str, "CanonicalValue"]] = None) -> None:
        self._fields: Dict[str, CanonicalValue] = dict(fields or {})

    def __getitem__(self, key: str) -> "CanonicalValue":
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"CanonicalRecord({self._fields!r})"

    def records(self, key: str) -> Tuple["CanonicalRecord", ...]:
        """Return the field as a sequence of records.

        A single nested record is returned as a one-element tuple; a missing or
        scalar field yields an empty tuple.
        """
        value = self._fields.get(key)
        if isinstance(value, tuple):
            return value
        if isinstance(value, CanonicalRecord):
            return (value,)
        return ()


# Null | Text | CanonicalRecord | List<CanonicalRecord>
CanonicalValue = Union[None, str, CanonicalRecord, Tuple[CanonicalRecord, ...]]


# ---------------------------------------------------------------------------
# Transport collaborator
# ---------------------------------------------------------------------------

class CatalogTransport(ABC):
    """Every transport used by the catalog must implement this interface."""

    @abstractmethod
    def call(self, operation: str, body: Mapping[str, Any]) -> RawNode:
        """Invoke ``operation`` remotely and return the response's record wrapper.

        Implementations raise ``TransportFailure`` when the remote call can not
        be completed.
        """

    def close(self) -> None:
        """Release any connection resources held by the transport."""
