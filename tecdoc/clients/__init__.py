"""
Catalog transports.

- real_http/: SOAP over HTTP against the live catalog web service
- mocks/: recorded responses for development and tests

Switching between them happens in ONE place: the transport handed to Catalog
(see Catalog.from_config).
"""

from .mocks import RecordedTransport
from .real_http import SoapTransport

__all__ = ["RecordedTransport", "SoapTransport"]
