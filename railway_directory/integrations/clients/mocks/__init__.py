"""
Mock integration clients.

These return fake (but realistic) responses without calling any external API.
They are used when:
- The directory backend is not reachable from a development machine
- We want to test services and state containers end-to-end

Important:
- The mock speaks HTTP through httpx.MockTransport, so the REAL services and
  ApiClient run unchanged on top of it.

Switching to real:
Unset USE_MOCK_BACKEND; railway_directory/app.py then uses the network transport.
"""

from .directory_backend import MockDirectoryBackend

__all__ = ["MockDirectoryBackend"]
