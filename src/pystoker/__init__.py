"""pystoker - Prometheus exporter for Rock's BBQ Stoker controllers."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pystoker")
except PackageNotFoundError:
    __version__ = "0+local"

from pystoker.config import IngestionMode, StokerConfig
from pystoker.exceptions import (
    StokerConfigError,
    StokerError,
    StokerParseError,
    StokerPayloadError,
    StokerTransportError,
)
from pystoker.export import SnapshotExporter, StokerCollector
from pystoker.ingestion.lines import parse_line
from pystoker.ingestion.payload import parse_payload
from pystoker.ingestion.poll import PollIngestor
from pystoker.ingestion.stream import StreamIngestor
from pystoker.models import (
    BlowerReading,
    FailureCategory,
    MetricRecord,
    MetricType,
    ProbeKind,
    ProbeReading,
)
from pystoker.state import StateStore, StoreSnapshot

__all__ = [
    "__version__",
    "BlowerReading",
    "FailureCategory",
    "IngestionMode",
    "MetricRecord",
    "MetricType",
    "PollIngestor",
    "ProbeKind",
    "ProbeReading",
    "SnapshotExporter",
    "StateStore",
    "StokerCollector",
    "StokerConfig",
    "StokerConfigError",
    "StokerError",
    "StokerParseError",
    "StokerPayloadError",
    "StokerTransportError",
    "StoreSnapshot",
    "StreamIngestor",
    "parse_line",
    "parse_payload",
]
