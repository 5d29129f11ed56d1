"""
Exception types raised by the persistence, repository and auth layers.

Routers translate these into HTTP responses; nothing here knows about HTTP.
"""


class ConfigurationError(Exception):
    """Process configuration is unusable (e.g. no MongoDB URI)."""


class PersistenceError(Exception):
    """A MongoDB operation failed."""


class PersistenceUnavailableError(PersistenceError):
    """The persistence client is not connected; the operation was not attempted."""


class RecordNotFoundError(LookupError):
    """No record exists with the requested id."""

    def __init__(self, record_id: str):
        super().__init__(f"Record {record_id!r} not found")
        self.record_id = record_id


class InvalidRecordIdError(RecordNotFoundError):
    """The requested id is not a valid ObjectId, so it cannot match any record."""

    def __init__(self, record_id: str):
        LookupError.__init__(self, f"Invalid record id {record_id!r}")
        self.record_id = record_id


class RecordValidationError(ValueError):
    """A record payload was rejected."""


class DuplicateSsnError(RecordValidationError):
    """Another record already uses this SSN."""


class CredentialsFormatError(ValueError):
    """Username or password does not have the required shape."""


class AccountExistsError(ValueError):
    """An account with this username already exists."""


class IncorrectCredentialsError(ValueError):
    """No account matches the submitted username and password."""
