"""Domain errors (typed) for the harvest pipeline.

Why: One error family for the application layer, without infra leaks.
"""


class DomainError(Exception):
    """Base class for domain-specific errors."""


class ValidationError(DomainError):
    """Invalid input/domain state."""


class EnumerationError(DomainError):
    """Bucket listing failed; no partial enumeration is possible."""


class ObjectFetchError(DomainError):
    """Range fetch of a single object failed."""


class ExtractionError(DomainError):
    """Embedded metadata header could not be decoded."""


class TruncatedHeaderError(ExtractionError):
    """Header segment extends past the end of the fetched prefix."""


class MalformedHeaderError(ExtractionError):
    """Marker stream is not a well-formed header."""


class MetadataStoreError(DomainError):
    """Key-value store backend failed or is misconfigured."""


class MetadataNotFoundError(MetadataStoreError):
    """No value stored under the requested key."""
