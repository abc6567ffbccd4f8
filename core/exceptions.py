"""Typed exceptions for inventory store failures."""


class StoreError(Exception):
    """Base class for inventory store errors."""


class StoreNotInitializedError(StoreError):
    """
    Store used before init() (or after close()).

    Callers must initialize the store before issuing any operation.
    """


class ReferencedEntityError(StoreError):
    """
    Delete rejected because other rows still reference the entity.

    Only raised under the restrict delete policy; the default orphan policy
    removes the row and leaves references dangling.
    """

    def __init__(self, entity_type: str, entity_id: int, referenced_by: str, count: int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.referenced_by = referenced_by
        self.count = count
        super().__init__(
            f"Cannot delete {entity_type} {entity_id}: referenced by {count} {referenced_by}"
        )
