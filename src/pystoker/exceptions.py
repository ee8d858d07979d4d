"""Custom exception hierarchy for pystoker."""

from __future__ import annotations

from pystoker.models.reading import FailureCategory


class StokerError(Exception):
    """Base exception for all pystoker errors."""


class StokerConfigError(StokerError):
    """Invalid or missing configuration."""


class StokerTransportError(StokerError):
    """HTTP-level failure (network, timeout, non-200)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)

    @property
    def category(self) -> FailureCategory:
        if self.status_code is not None:
            return FailureCategory.HTTP_STATUS
        return FailureCategory.FETCH


class StokerParseError(StokerError):
    """A telnet record looked like probe data but could not be used.

    ``detail`` carries the offending token for diagnostics, e.g. the
    unexpected marker of an unrecognised extended record.
    """

    def __init__(self, message: str, *, category: FailureCategory, detail: str = "") -> None:
        self.category = category
        self.detail = detail
        super().__init__(message)


class StokerPayloadError(StokerError):
    """A JSON payload was rejected as a whole (undecodable or no sensors)."""

    def __init__(self, message: str, *, category: FailureCategory = FailureCategory.DECODE) -> None:
        self.category = category
        super().__init__(message)
