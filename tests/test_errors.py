"""
Tests for europass_cv.errors module.
"""

import pytest

from europass_cv.errors import (
    EXIT_BACKEND_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_VALIDATION_ERROR,
    ConfigurationError,
    EuropassCVError,
    RenderBackendError,
    TemplateError,
    ValidationError,
)


class TestExitCodes:
    """Every error type maps to its own exit code."""

    @pytest.mark.parametrize("error_cls,code", [
        (ConfigurationError, EXIT_CONFIG_ERROR),
        (TemplateError, 3),
        (RenderBackendError, EXIT_BACKEND_ERROR),
        (ValidationError, EXIT_VALIDATION_ERROR),
    ])
    def test_exit_code(self, error_cls, code):
        error = error_cls("boom")
        assert isinstance(error, EuropassCVError)
        assert error.exit_code == code
        assert error.message == "boom"
        assert str(error) == "boom"

    def test_base_exit_code(self):
        assert EuropassCVError("x").exit_code == 1
