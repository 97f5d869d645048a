"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str, field: str = "id"):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.field = field
        super().__init__(f"{entity_type} with {field} '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: int | str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class DomainValidationError(Exception):
    """Raised when caller input violates a business rule (range, length, empty payload)."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


class StoreConstraintError(Exception):
    """Raised by a repository when the store rejects a write on an integrity constraint.

    ``kind`` is ``"unique"`` or ``"foreign_key"``. Services translate it into
    ``DuplicateEntityError`` / ``EntityNotFoundError``; it should never reach
    the presentation layer.
    """

    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"

    def __init__(self, kind: str, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(f"{kind} constraint violated: {detail}" if detail else f"{kind} constraint violated")
