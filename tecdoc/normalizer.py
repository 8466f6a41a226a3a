"""
Response tree normalization.

The catalog service encodes every collection as a wrapper element holding an
``array`` element, which in turn holds one ``array`` element per record:

    <articleAttributes>
      <array>
        <array><attrName>Length</attrName><attrValue>1025</attrValue></array>
        <array>...</array>
      </array>
    </articleAttributes>

``normalize`` turns any node of such a tree into a canonical value:

1. collection wrapper            -> tuple of CanonicalRecord
2. node with element children    -> CanonicalRecord (last duplicate name wins)
3. leaf with empty/absent text   -> None
4. leaf with text                -> the text, unparsed

Field names are converted to snake_case so ``articleId`` is looked up as
``article_id`` whatever the service's casing.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from tecdoc.contracts.interfaces import CanonicalRecord, CanonicalValue, RawNode
from tecdoc.errors import UnexpectedShape

ARRAY = "array"

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


def snake_case(name: str) -> str:
    """``articleId`` -> ``article_id``, ``OENNumbers`` -> ``oen_numbers``."""
    value = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    value = _WORD_BOUNDARY.sub(r"\1_\2", value)
    return value.replace(".", "_").replace("-", "_").lower()


def normalize(node: RawNode, path: Tuple[str, ...] = ()) -> CanonicalValue:
    path = path + (node.name,)
    if is_collection(node):
        return tuple(_normalize_members(node, path))
    if node.children:
        return normalize_record(node, path)
    if not node.text:
        return None
    return node.text


def normalize_record(node: RawNode, path: Tuple[str, ...] = ()) -> CanonicalRecord:
    fields: Dict[str, CanonicalValue] = {}
    for child in node.children:
        # Duplicate names overwrite earlier ones, as the service encodes them.
        fields[snake_case(child.name)] = normalize(child, path)
    return CanonicalRecord(fields)


def normalize_collection(node: RawNode) -> List[CanonicalRecord]:
    """Normalize a top-level record wrapper into a list of records.

    An empty wrapper is an empty result; any other non-collection shape is an
    error rather than an empty list.
    """
    if not node.children and _blank(node.text):
        return []
    if not is_collection(node):
        names = ", ".join(child.name for child in node.children) or repr(node.text)
        raise UnexpectedShape(
            f"expected a list of records, found {names}",
            path=(node.name,),
        )
    return _normalize_members(node, (node.name,))


def is_collection(node: RawNode) -> bool:
    if not node.children:
        return False
    wrappers = [child for child in node.children if child.name == ARRAY]
    if any(child.name == ARRAY for wrapper in wrappers for child in wrapper.children):
        return True
    # <x><array/></x>: a collection that came back with no records
    return len(wrappers) == len(node.children) and all(
        not wrapper.children and _blank(wrapper.text) for wrapper in wrappers
    )


def _normalize_members(node: RawNode, path: Tuple[str, ...]) -> List[CanonicalRecord]:
    records: List[CanonicalRecord] = []
    for wrapper in node.children:
        if wrapper.name != ARRAY:
            raise UnexpectedShape(f"unexpected element {wrapper.name!r} beside the record list", path=path)
        for index, member in enumerate(wrapper.children):
            member_path = path + (ARRAY, f"{ARRAY}[{index}]")
            if member.name != ARRAY:
                raise UnexpectedShape(f"unexpected element {member.name!r} in the record list", path=member_path)
            if not member.children and not _blank(member.text):
                raise UnexpectedShape(
                    f"collection member holds bare text {member.text!r} instead of fields",
                    path=member_path,
                )
            records.append(normalize_record(member, member_path))
    return records


def _blank(text: Optional[str]) -> bool:
    # Indentation between tags is not content.
    return not (text or "").strip()
