class ShortLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlinks_error'


class InvalidInputError(ShortLinksError):
    """Raised when a caller provides a missing or non-string target URL."""

    error_code = 'app:invalid_input_error'


class ExhaustedRetriesError(ShortLinksError):
    """Raised when every shortcode candidate of an allocation collided.

    Attributes:
        attempts (int): number of insert attempts made before giving up.
    """

    error_code = 'app:exhausted_retries_error'

    def __init__(self, message: str = '', attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class ConfigurationError(ShortLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
