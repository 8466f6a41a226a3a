"""
SOAP envelope encoding and decoding for the catalog service.

Requests are ``<operation><in>...</in></operation>`` with lowerCamelCase
parameter elements. Responses carry the records in a ``data`` element next to
``status`` / ``statusText``; ``parse_envelope`` returns that ``data`` element
as a RawNode.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from lxml import etree

from tecdoc.contracts.interfaces import RawNode
from tecdoc.errors import TransportFailure, UnexpectedShape

SOAP_ENV_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SERVICE_NS = "http://server.cat.tecdoc.net"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def camel_case(key: str) -> str:
    """``article_number`` -> ``articleNumber``; keys without underscores pass through."""
    if "_" not in key:
        return key
    head, *rest = [part for part in key.split("_") if part]
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def build_envelope(operation: str, body: Mapping[str, Any]) -> bytes:
    envelope = etree.Element(
        f"{{{SOAP_ENV_NS}}}Envelope",
        nsmap={"soapenv": SOAP_ENV_NS, "ns": SERVICE_NS, "xsi": XSI_NS},
    )
    soap_body = etree.SubElement(envelope, f"{{{SOAP_ENV_NS}}}Body")
    request = etree.SubElement(soap_body, f"{{{SERVICE_NS}}}{operation}")
    _append_value(etree.SubElement(request, "in"), body)
    return etree.tostring(envelope, xml_declaration=True, encoding="UTF-8")


def _append_value(element: etree._Element, value: Any) -> None:
    if value is None:
        element.set(f"{{{XSI_NS}}}nil", "true")
    elif isinstance(value, Mapping):
        for key, item in value.items():
            _append_value(etree.SubElement(element, camel_case(str(key))), item)
    elif isinstance(value, (list, tuple, set, frozenset)):
        array = etree.SubElement(element, "array")
        for item in value:
            _append_value(etree.SubElement(array, "id"), item)
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    else:
        element.text = str(value)


def parse_envelope(content: bytes, operation: str) -> RawNode:
    """Return the ``data`` element of a response envelope.

    Raises ``TransportFailure`` for SOAP faults and non-200 service statuses,
    ``UnexpectedShape`` when the document is not a catalog response.
    """
    try:
        root = etree.fromstring(content, parser=_PARSER)
    except etree.XMLSyntaxError as exc:
        raise UnexpectedShape(f"response is not well-formed XML: {exc}", operation=operation) from exc

    fault = fault_message(root)
    if fault is not None:
        raise TransportFailure(operation, f"SOAP fault: {fault}")

    data = _first_local(root, "data")
    if data is None:
        raise UnexpectedShape("response has no data element", operation=operation, path=(etree.QName(root).localname,))

    parent = data.getparent()
    status = _first_local(parent, "status", direct=True) if parent is not None else None
    if status is not None and (status.text or "").strip() not in ("", "200"):
        status_text = _first_local(parent, "statusText", direct=True)
        reason = (status_text.text or "").strip() if status_text is not None else ""
        raise TransportFailure(operation, f"service status {status.text.strip()} {reason}".rstrip())

    return element_to_node(data)


def fault_message(root: etree._Element) -> Optional[str]:
    fault = root.find(f".//{{{SOAP_ENV_NS}}}Fault")
    if fault is None:
        return None
    message = _first_local(fault, "faultstring")
    return (message.text or "").strip() if message is not None else "unknown fault"


def element_to_node(element: etree._Element) -> RawNode:
    children = tuple(element_to_node(child) for child in element if isinstance(child.tag, str))
    if children:
        return RawNode(name=etree.QName(element).localname, children=children)
    if element.get(f"{{{XSI_NS}}}nil") == "true":
        return RawNode(name=etree.QName(element).localname)
    return RawNode(name=etree.QName(element).localname, text=element.text or "")


def _first_local(element: etree._Element, name: str, direct: bool = False) -> Optional[etree._Element]:
    candidates = element.iterchildren() if direct else element.iter()
    for candidate in candidates:
        if isinstance(candidate.tag, str) and etree.QName(candidate).localname == name:
            return candidate
    return None


def fault_from_content(content: bytes) -> Optional[str]:
    """Return the faultstring of an error response body, if it is a SOAP fault."""
    try:
        return fault_message(etree.fromstring(content, parser=_PARSER))
    except etree.XMLSyntaxError:
        return None
