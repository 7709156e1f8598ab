class TableNotFoundException(Exception):
    """Raised when the target table does not exist or has no columns."""

    pass


class DataAccessException(Exception):
    """Raised when a single query against the data source fails."""

    pass


class VerificationTimeoutException(DataAccessException):
    """Raised when a verification query exceeds its time limit."""

    pass


class ConfigurationException(Exception):
    """Raised for invalid discovery settings, e.g. a non-positive LHS size."""

    pass
