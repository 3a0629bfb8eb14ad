"""Domain-specific exceptions — framework-independent."""


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class InvalidInputError(Exception):
    """Raised when a required field is missing or malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class StorageError(Exception):
    """Raised when durable storage cannot be read or written.

    Never retried automatically.
    """

    def __init__(self, location: str, message: str):
        self.location = location
        self.message = message
        super().__init__(f"Storage failure at {location}: {message}")


class IdentifierExhaustedError(Exception):
    """Raised when no free identifier was drawn within the attempt limit."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"No free identifier found after {attempts} attempts")
