# services/__init__.py

"""
MoodGrid services

Client-side access to the import/export API.
"""

from .sync_client import DEFAULT_API_URL, SyncClient, TransportError

__all__ = [
    'DEFAULT_API_URL',
    'SyncClient',
    'TransportError'
]
