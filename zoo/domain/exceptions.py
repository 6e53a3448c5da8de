"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class StoreUnavailableError(Exception):
    """Raised when the entity store fails (connection loss, timeouts, throttling).

    Never retried or swallowed inside the application layer; the HTTP layer
    maps it to a 5xx response.
    """

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        message = f"Store operation '{operation}' failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class CacheUnavailableError(StoreUnavailableError):
    """Raised when the shared cache backend cannot be reached."""

    def __init__(self, operation: str, cause: Exception | None = None):
        super().__init__(f"cache.{operation}", cause)
