"""Error taxonomy shared by the read/write models.

Models raise these; routers translate them into HTTP responses.
"""


class WeddingSiteError(Exception):
    """Base class for every error the workflow raises on purpose."""


class NotFoundError(WeddingSiteError):
    """An id or capability token does not resolve."""


class InvalidTokenError(NotFoundError):
    """An invite or portal token is unknown or belongs to an unapproved guest."""


class StateConflictError(WeddingSiteError):
    """The entity is not in the source state the action requires."""

    def __init__(self, entity: str, current: str, action: str) -> None:
        self.entity = entity
        self.current = current
        self.action = action
        super().__init__(f"Cannot {action} {entity}: current status is '{current}'")


class WorkflowValidationError(WeddingSiteError):
    """A field failed a server-side rule."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")

    def as_detail(self) -> list[dict]:
        return [{"loc": ["body", self.field], "msg": self.message, "type": "value_error"}]


class StorageError(WeddingSiteError):
    """The photo asset store failed to read, write or delete."""
