from crm.common.exceptions import InternalError, InternalException


class RepositoryObjectNotFound(InternalException):
    """
    Raised when no document matches the lookup
    """

    ...


class RepositoryIntegrityError(InternalException):
    """
    Wraps pymongo's duplicate key error when a unique index is violated
    """

    ...


class DatabaseUnavailable(InternalError):
    """
    The document store could not be reached
    """

    ...
