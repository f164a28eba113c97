class TTLShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:ttlshortener_error'


class ConfigurationError(TTLShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class ShortenerError(TTLShortenerError):
    """Base exception for shortcode generation and reservation errors."""

    error_code = 'shortener:shortener_error'


class RandomnessUnavailableError(ShortenerError):
    """Raised when the secure random source cannot supply entropy."""

    error_code = 'shortener:randomness_unavailable_error'


class ShortcodeExhaustedError(ShortenerError):
    """Raised when every collision retry produced an already taken shortcode.

    Attributes:
        attempts (ShortenAttempts | None):
            Final state of the collision retry state machine.
    """

    error_code = 'shortener:shortcode_exhausted_error'

    def __init__(self, message: str, attempts=None):
        super().__init__(message)
        self.attempts = attempts
