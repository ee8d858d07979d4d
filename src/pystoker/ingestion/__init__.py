"""Ingestion layer.

Adapters that receive data from the Stoker (telnet stream or JSON polling)
and hand typed readings to the state store.
"""

__all__: list[str] = []
