"""State/store layer.

Single source of truth for collected probe and blower state. Both
ingestion modes write here; the exporter only reads snapshots.
"""

from pystoker.state.snapshot import StoreSnapshot
from pystoker.state.store import StateStore

__all__ = ["StateStore", "StoreSnapshot"]
