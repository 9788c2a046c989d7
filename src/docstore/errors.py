"""Error kinds raised by docstore.

Every error is local and synchronous: it is raised where the condition is
detected and never retried internally. Callers decide whether to recover.

Usage:
    from docstore.errors import NoSuchItem, ModelMismatch

    try:
        record = users.get("u1")
    except NoSuchItem:
        record = None
"""


class DocStoreError(Exception):
    """Base class for every docstore error."""

    pass


class NoSuchItem(DocStoreError, KeyError):
    """Raised when a key, name or locator has no live entry."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""


class ModelExists(DocStoreError):
    """Raised when a table name is already registered in the database."""

    pass


class ModelInvalid(DocStoreError):
    """Raised when a model or ancestor declaration is not usable."""

    pass


class ModelMissing(DocStoreError):
    """Raised when a named ancestor table does not exist."""

    pass


class ModelMismatch(DocStoreError):
    """Raised when a field's kind disagrees with the declared model."""

    pass


class ReservedCharacterUsed(DocStoreError):
    """Raised when a key or table name contains the path delimiter."""

    pass


class GlobalSizeLimitReached(DocStoreError):
    """Raised when the global key-value store has no room for a value."""

    pass
