"""Centralized exception hierarchy for the itinerary map generator.

Usage:
    from exceptions import ExtractionFailure, BackgroundSynthesisFailure

    raise ExtractionFailure("No JSON payload returned")
    raise BackgroundSynthesisFailure("No image part in response")
"""


class TravelMapError(Exception):
    """Base exception for all itinerary map errors."""
    pass


class ConfigurationError(TravelMapError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Missing API key
        - Unknown model name
    """
    pass


class GenerationError(TravelMapError):
    """Raised when a mandatory generation step fails.

    The orchestrator treats every subclass as a run failure.
    """
    pass


class ExtractionFailure(GenerationError):
    """Raised when itinerary text cannot be turned into locations.

    Examples:
        - Upstream call failed
        - Empty response text
        - Response is not a JSON array
    """
    pass


class BackgroundSynthesisFailure(GenerationError):
    """Raised when the map background image cannot be produced.

    Examples:
        - Upstream call failed
        - Response carries no inline image
    """
    pass
