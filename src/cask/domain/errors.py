"""Domain-layer error definitions."""

# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors."""


# ============================================================================
#                           Tasting related errors
# ============================================================================


class InvalidTastingError(DomainError):
    """Raised when a tasting submission violates a domain rule."""


class CreatedAtTooFarInFutureError(InvalidTastingError):
    """Raised when a tasting's timestamp lies too far in the future."""

    def __init__(self, max_seconds: int) -> None:
        super().__init__("createdAt too far in future")
        self.max_seconds = max_seconds


class CreatedAtTooFarInPastError(InvalidTastingError):
    """Raised when a tasting's timestamp lies too far in the past."""

    def __init__(self, max_seconds: int) -> None:
        super().__init__("createdAt too far in past")
        self.max_seconds = max_seconds


class TagTooLongError(InvalidTastingError):
    """Raised when a tag exceeds the stored tag length."""

    def __init__(self, tag: str, max_length: int) -> None:
        super().__init__(f"Tags must be at most {max_length} characters.")
        self.tag = tag
        self.max_length = max_length


class InvalidRatingError(InvalidTastingError):
    """Raised when a rating falls outside the permitted scale."""

    def __init__(self, rating: float) -> None:
        super().__init__(f"Rating {rating} must be between 0 and 5.")
        self.rating = rating


# ============================================================================
#                           Badge related errors
# ============================================================================


class BadgeCheckError(DomainError):
    """Base class for errors raised while building badge checks."""


class UnknownCheckTypeError(BadgeCheckError):
    """Raised when a check payload names a type with no registered variant."""

    def __init__(self, check_type: str) -> None:
        super().__init__(f"Unknown badge check type '{check_type}'.")
        self.check_type = check_type


class InvalidCheckConfigError(BadgeCheckError):
    """Raised when a check's configuration payload is malformed."""

    def __init__(self, check_type: str, reason: str) -> None:
        super().__init__(f"Invalid config for '{check_type}' check: {reason}")
        self.check_type = check_type
        self.reason = reason


class InvalidBadgeError(DomainError):
    """Raised when a badge definition violates a domain rule."""
