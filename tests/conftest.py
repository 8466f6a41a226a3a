"""Pytest fixtures for catalog client tests."""

from pathlib import Path
from typing import Any, Iterable, Mapping

import pytest

from tecdoc.catalog import Catalog
from tecdoc.clients.mocks import RecordedTransport
from tecdoc.contracts.interfaces import RawNode

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def build_node(name: str, value: Any) -> RawNode:
    """Build a response tree the way the service encodes it.

    dict -> element with one child per key, list -> ``array``/``array``
    collection wrapper, anything else -> leaf text.
    """
    if isinstance(value, RawNode):
        return value
    if isinstance(value, Mapping):
        return RawNode(name, tuple(build_node(key, item) for key, item in value.items()))
    if isinstance(value, list):
        members = tuple(build_node("array", item) for item in value)
        return RawNode(name, (RawNode("array", members),))
    return RawNode(name, text=value)


def build_response(records: Iterable[Mapping[str, Any]]) -> RawNode:
    return build_node("data", list(records))


@pytest.fixture
def make_node():
    return build_node


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def transport() -> RecordedTransport:
    return RecordedTransport()


@pytest.fixture
def catalog(transport) -> Catalog:
    return Catalog(transport, provider=123, lang="lv", country="lv")


@pytest.fixture
def recorded_catalog(fixtures_dir) -> Catalog:
    """Catalog replaying the recorded envelopes under tests/fixtures."""
    return Catalog(RecordedTransport.from_directory(fixtures_dir), provider=123, lang="lv", country="lv")
