class FormstreamError(Exception):
    """Base error for formstream."""


class InvalidInputError(FormstreamError, TypeError):
    """Raised when part content cannot be adapted to a stream."""
