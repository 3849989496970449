"""Service-layer error taxonomy.

Handlers translate domain and store errors into these. Entrypoints map them
to responses: `InvalidInputError` is a client mistake (HTTP 400),
`ConflictError` a uniqueness collision (HTTP 409). Anything else raised by a
handler is an internal failure.
"""


class CaskError(Exception):
    """Base class for errors surfaced to callers of the service layer.

    Attributes:
        message (str): Human-readable description, safe to show to clients.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(CaskError):
    """Raised when a command is malformed or violates a validation rule."""


class NotFoundError(InvalidInputError):
    """Raised when a command references a record that does not exist."""


class ConflictError(CaskError):
    """Raised when a command collides with an existing record."""
