"""
Custom exceptions for Algolia operations

Only misuse raises: bad configuration and invalid arguments. HTTP and
transport failures are returned as result values; the exceptions at the
bottom of this module are raised only by ``Result.unwrap()``.
"""
from .constants import API_KEY_ENV, APPLICATION_ID_ENV


class AlgoliaError(Exception):
    """Base exception for all Algolia errors"""
    
    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error
        self.message = message
    
    def __str__(self):
        if self.original_error:
            return f"{self.message} (Original: {self.original_error})"
        return self.message


class ConfigurationError(AlgoliaError):
    """Exception raised for configuration errors"""
    
    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")


class MissingApplicationIDError(ConfigurationError):
    """Raised when no application id is given or found in the environment"""
    
    def __init__(self):
        super().__init__(
            "The application_id setting is required to use Algolia. Pass it "
            f"explicitly or set the {APPLICATION_ID_ENV} environment variable."
        )


class MissingAPIKeyError(ConfigurationError):
    """Raised when no API key is given or found in the environment"""
    
    def __init__(self):
        super().__init__(
            "The api_key setting is required to use Algolia. Pass it "
            f"explicitly or set the {API_KEY_ENV} environment variable."
        )


class ValidationError(AlgoliaError):
    """Exception raised for invalid arguments, before any request is sent"""
    
    def __init__(self, message: str, field: str = None):
        if field:
            message = f"Invalid value for '{field}': {message}"
        super().__init__(f"Validation error: {message}")
        self.field = field


class InvalidObjectIDError(ValidationError):
    """Exception raised for an empty object id"""
    
    def __init__(self, field: str = "object_id"):
        super().__init__("The ObjectID cannot be an empty string", field)


class AlgoliaHTTPError(AlgoliaError):
    """Raised by ``HttpError.unwrap()``"""
    
    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class AlgoliaUnreachableError(AlgoliaError):
    """Raised by ``TransportFailure.unwrap()``"""
    
    def __init__(self, message: str, attempts: int, original_error: Exception = None):
        super().__init__(f"{message} after {attempts} attempts", original_error)
        self.attempts = attempts


# Exception hierarchy
EXCEPTION_HIERARCHY = {
    AlgoliaError: [
        ConfigurationError,
        ValidationError,
        AlgoliaHTTPError,
        AlgoliaUnreachableError,
    ],
    ConfigurationError: [
        MissingApplicationIDError,
        MissingAPIKeyError,
    ],
    ValidationError: [
        InvalidObjectIDError,
    ],
}
