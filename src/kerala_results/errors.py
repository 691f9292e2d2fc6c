"""Exception types raised by the extraction pipeline and its collaborators."""

from __future__ import annotations


class KeralaResultsError(Exception):
    """Base class for every error raised by this package."""


class RuleCompileError(KeralaResultsError, ValueError):
    """A normalization rule pattern failed to compile."""


class StructuralParseError(KeralaResultsError, ValueError):
    """Tagged document text contains a tier marker without a closing ``>``."""


class InvalidTicketFormat(KeralaResultsError, ValueError):
    """A submitted ticket cannot be checked."""

    def __init__(self, ticket: object) -> None:
        super().__init__(f"Invalid ticket format: {ticket!r}")
        self.ticket = ticket


class DocumentFetchError(KeralaResultsError):
    """The draw listing or a result document could not be downloaded."""


class SnapshotError(KeralaResultsError, ValueError):
    """A persisted result snapshot is unreadable or malformed."""
