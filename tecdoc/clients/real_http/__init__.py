"""
Real HTTP catalog clients.

These clients talk to the live catalog web service.

Important:
- Must implement the same CatalogTransport interface as the mock clients
- Must return the response's data wrapper as a RawNode (see clients/envelope.py)
"""

from .soap import DEFAULT_ENDPOINT, SoapTransport

__all__ = ["DEFAULT_ENDPOINT", "SoapTransport"]
