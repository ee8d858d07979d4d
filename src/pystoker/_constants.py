"""Internal constants shared across the library."""

DEFAULT_STREAM_PORT = 23
DEFAULT_LISTEN = "0.0.0.0:9190"
METRICS_NAMESPACE = "stoker"

# Stoker firmware streams roughly once per second.
DEFAULT_DIAL_TIMEOUT: float = 10.0
DEFAULT_READ_TIMEOUT: float = 30.0
DEFAULT_RECONNECT_BACKOFF: float = 1.0
DEFAULT_POLL_INTERVAL: float = 15.0
DEFAULT_FETCH_TIMEOUT: float = 10.0

# ------------------------------------------------------------------
# Telnet line layout
#
#   2A0000110A314B30: 1.0 3.8 38.8 142.5 3.6 0.1 3.7 91.7 197.0 PID: NORM tgt:107.2 ...
#
# Identifier, nine readings, then (pit probes only) the PID section.
# ------------------------------------------------------------------

PROBE_ID_SUFFIX = ":"
PROBE_READING_COUNT = 9
TEMPERATURE_READING_INDEX = 8
PID_MARKER_INDEX = 1 + PROBE_READING_COUNT
PID_MARKER = "PID:"

UNKNOWN_BLOWER = "unknown"


def celsius_to_fahrenheit(temp_c: float) -> float:
    """Convert a °C reading to °F."""
    return temp_c * 9.0 / 5.0 + 32.0
