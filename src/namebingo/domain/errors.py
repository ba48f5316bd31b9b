"""Error kinds raised by the domain and infrastructure layers.

Services translate these into ``ServiceResult`` failures using ``code``;
the web layer turns them into 500 responses.
"""

from __future__ import annotations

from typing import Any, ClassVar


class BingoError(Exception):
    """Base class for every namebingo failure."""

    code: ClassVar[str] = "BINGO_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class SourceUnavailable(BingoError):
    """A name source could not produce data (missing file, failed query or command)."""

    code = "SOURCE_UNAVAILABLE"


class ConfigurationError(BingoError, ValueError):
    """Grid dimensions or padding policy cannot produce a card."""

    code = "CONFIGURATION_ERROR"


class InvariantViolation(BingoError, AssertionError):
    """Internal mismatch between expected and actual cell counts. A programming defect."""

    code = "INVARIANT_VIOLATION"
