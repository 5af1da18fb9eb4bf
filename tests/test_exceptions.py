"""Tests for exception hierarchy."""

import pytest


class TestExceptionHierarchy:
    """Tests for exception classes."""

    def test_base_exception_exists(self):
        """Should have TravelMapError base exception."""
        from exceptions import TravelMapError

        assert issubclass(TravelMapError, Exception)

    def test_configuration_error_inherits(self):
        from exceptions import TravelMapError, ConfigurationError

        assert issubclass(ConfigurationError, TravelMapError)

    def test_generation_failures_share_a_base(self):
        """Both mandatory-path failures are GenerationErrors."""
        from exceptions import GenerationError, ExtractionFailure, BackgroundSynthesisFailure, TravelMapError

        assert issubclass(GenerationError, TravelMapError)
        assert issubclass(ExtractionFailure, GenerationError)
        assert issubclass(BackgroundSynthesisFailure, GenerationError)

    def test_configuration_error_is_not_a_generation_error(self):
        from exceptions import ConfigurationError, GenerationError

        assert not issubclass(ConfigurationError, GenerationError)

    @pytest.mark.parametrize("name", [
        "TravelMapError",
        "ConfigurationError",
        "GenerationError",
        "ExtractionFailure",
        "BackgroundSynthesisFailure",
    ])
    def test_exception_has_message(self, name):
        """All exception types should store messages correctly."""
        import exceptions

        err = getattr(exceptions, name)("something failed")

        assert str(err) == "something failed"
