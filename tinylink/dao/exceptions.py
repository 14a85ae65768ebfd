from tinylink.exceptions import TinyLinkError


class DAOError(TinyLinkError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class DataStoreError(DAOError):
    """Raised when the data store encounters an error.

    Examples include connection issues, timeouts, throttling and rejected queries.
    """

    error_code = 'dao:data_store_error'


class ShortcodeAllocationError(DataStoreError):
    """Raised when no free short code was found within the allowed number of attempts."""

    error_code = 'dao:shortcode_allocation_error'
