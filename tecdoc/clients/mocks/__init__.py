"""
Mock catalog clients.

These clients return recorded (but real) service responses without calling the
network. They are used when:
- no provider id / service access is available
- we want to exercise search and entity accessors end-to-end in tests

Important:
- Mock clients implement the SAME CatalogTransport interface as the SOAP client.
- Recorded envelopes go through the same envelope decoder as live responses.
"""

from .recorded import RecordedTransport

__all__ = ["RecordedTransport"]
