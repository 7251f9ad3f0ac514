class CatalogError(Exception):
    """Base class for the errors raised by the catalog store."""


class SchemaConflict(CatalogError):
    """
    The relation already exists with columns we do not expect.
      Needs an operator to drop or migrate it by hand.
    """

    def __init__(self, relation, found, reason=None):
        self.relation = relation
        self.found = found
        self.reason = reason
        columns = ", ".join(f"{name} {datatype}" for name, datatype in found)
        message = f'Relation "{relation}" already exists with an incompatible shape: ({columns})'
        if reason:
            message += f"; {reason}"
        super().__init__(message)


class StorageUnavailable(CatalogError):
    """The database cannot be reached or written to."""


class BookNotFound(CatalogError):
    def __init__(self, book_id):
        self.book_id = book_id
        super().__init__(f"No book with id {book_id}")
