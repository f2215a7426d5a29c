"""
Engine Errors

Exceptions raised by the margin engine. Batch operations catch these per
item and report them in their result instead of aborting.
"""


class EngineError(Exception):
    """Base class for all engine errors."""
    pass


class ValidationError(EngineError):
    """Raised when input is rejected before any state change."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class NotFoundError(EngineError):
    """Raised when an ingredient, menu item or alert id does not exist."""

    def __init__(self, entity, entity_id):
        super().__init__(f'{entity} {entity_id} not found')
        self.entity = entity
        self.entity_id = entity_id


class RepositoryError(EngineError):
    """Raised when the catalog repository fails to read or write."""
    pass
