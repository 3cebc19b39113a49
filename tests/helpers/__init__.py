"""Test helper modules.

- fake_transport: in-memory transports recording every request
"""

from .fake_transport import FakeTransport, AsyncFakeTransport

__all__ = [
    'FakeTransport',
    'AsyncFakeTransport',
]
