"""
Exception hierarchy for Mookuauhau.

Every error raised by the query core derives from MookuauhauError, which
carries a message plus a context dictionary describing what went wrong
(the offending argument, record position, ids involved).
"""


class MookuauhauError(Exception):
    """Base for all Mookuauhau errors: a message plus structured context."""

    def __init__(self, message: str, context: dict | None = None):
        """
        Args:
            message: Human-readable description
            context: Offending argument, ids or record position
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict:
        """Message and context as one mapping, used for API error bodies."""
        return {"message": self.message, **self.context}


class ValidationError(MookuauhauError):
    """
    Request validation errors.
    Raised for negative pagination arguments, empty search text or malformed ids.
    """

    pass


class NotFoundError(MookuauhauError):
    """
    Resource not found errors.
    Raised by callers that need a hard failure when an id does not resolve.
    """

    pass


class StoreError(MookuauhauError):
    """
    Entity store misuse.
    Raised when a sealed store is modified.
    """

    pass


class DatasetError(MookuauhauError):
    """
    Build-time dataset errors.
    Raised for malformed records, duplicate ids and dangling references.
    Aborts startup.
    """

    pass


class ConfigurationError(MookuauhauError):
    """
    Configuration errors.
    Raised when configuration is invalid or missing required values.
    """

    pass
