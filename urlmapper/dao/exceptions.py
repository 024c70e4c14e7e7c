"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    MappingNotFoundError:
        Raised when no MappingRecord exists for a given key.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from urlmapper.dao.exceptions import MappingNotFoundError
    >>> raise MappingNotFoundError("Mapping with key 42 not found.")
    Traceback (most recent call last):
        ...
    urlmapper.dao.exceptions.MappingNotFoundError: Mapping with key 42 not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class MappingNotFoundError(DAOError):
    """Exception raised when a MappingRecord is not found in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    pass
