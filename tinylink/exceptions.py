class TinyLinkError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:tinylink_error'


class ValidationError(TinyLinkError):
    """Raised when a client request fails input validation."""

    error_code = 'app:validation_error'


class ConfigurationError(TinyLinkError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class InfrastructureError(TinyLinkError):
    """Base exception for all infrastructure (AWS) errors."""

    error_code = 'infra:infrastructure_error'


class AppConfigError(InfrastructureError):
    """Raised when AppConfig can't be reached or responds with erroneous data."""

    error_code = 'infra:appconfig_error'


class RequestBodyError(ValidationError):
    """Raised when the request body is not a JSON object."""

    error_code = 'request:invalid_body'


class MissingURLError(ValidationError):
    """Raised when the request body has no usable `url`."""

    error_code = 'request:missing_url'


class InvalidURLError(ValidationError):
    """Raised when `url` is not an HTTP(S) web address."""

    error_code = 'request:invalid_url'


class InvalidSubmitterError(ValidationError):
    """Raised when `submitter` is present but not a string."""

    error_code = 'request:invalid_submitter'
