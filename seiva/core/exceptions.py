"""Application Exceptions"""


class SeivaError(Exception):
    """Base class for application errors"""


class StoreNotInitializedError(SeivaError, RuntimeError):
    """
    Raised when the school data store is used outside its lifecycle:
    before the application wired one up, or after it was closed.
    This is a wiring defect, never a data condition.
    """


class BackendConfigurationError(SeivaError, ValueError):
    """Raised when the configured persistence backend cannot be built"""
