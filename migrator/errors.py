"""Exception types raised by the migration job."""


class MigrationError(Exception):
    """Base class for all migration job errors."""


class JobAbortedError(MigrationError):
    """The operator chose to abort the job at the issues prompt."""


class ConfigurationError(MigrationError):
    """The job configuration file is missing or invalid."""


class RecordStoreError(MigrationError):
    """A request to a record store failed."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code
