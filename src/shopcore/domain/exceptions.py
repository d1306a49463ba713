"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


# Checkout payload / cart problems are reported under this name at the edges.
InvalidRequest = ValidationError


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class Unauthenticated(DomainException):
    """The operation requires an authenticated principal."""


class Forbidden(DomainException):
    """The principal is authenticated but lacks the required role."""


class PersistenceError(DomainException):
    """The storage layer rejected or failed a read or write."""


class OrderCreationFailed(DomainException):
    """The order transaction was aborted; nothing was persisted."""


class CartStateCorrupt(DomainException):
    """Stored cart state could not be parsed."""


class RenderFailed(DomainException):
    """The primary document renderer failed or timed out.

    Never surfaces past the invoice generator, which swaps in the
    fallback document instead.
    """


class DatasetTooLarge(DomainException):
    """An export was refused because the collection exceeds the ceiling."""

    status_code = 413

    def __init__(self, entity_type: str, total: int, ceiling: int) -> None:
        self.entity_type = entity_type
        self.total = total
        self.ceiling = ceiling
        super().__init__(
            f"Cannot export more than {ceiling:,} {entity_type} at once. "
            f"Please use filters or contact support."
        )

    def to_payload(self) -> dict:
        return {
            "error": "Dataset too large",
            "message": str(self),
            "total": self.total,
        }
