"""
Custom error types and exit codes for Europass CV.
"""


class EuropassCVError(Exception):
    """Base exception for Europass CV errors."""

    exit_code = 1

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(EuropassCVError):
    """Settings, file access or path-related errors."""

    exit_code = 2


class TemplateError(EuropassCVError):
    """HTML template rendering errors."""

    exit_code = 3


class RenderBackendError(EuropassCVError):
    """The HTML to PDF conversion failed."""

    exit_code = 4


class ValidationError(EuropassCVError):
    """CV config is invalid (missing or blank personal.name, bad JSON)."""

    exit_code = 5


# Exit codes returned by the CLI outside the error classes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_BACKEND_ERROR = 4
EXIT_VALIDATION_ERROR = 5
