class TokenCacheError(Exception):
    """Base class for all session-cache errors."""
    pass


class MalformedTokenError(TokenCacheError):
    """Raised when a stored token cannot be decoded into claims."""
    pass


class StoreIOError(TokenCacheError):
    """Raised when the persistent store fails to answer."""
    pass


class ConfigurationError(TokenCacheError):
    """Raised when settings are missing or invalid."""
    pass
