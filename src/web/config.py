"""Configuration for the map web backend."""


class Settings:
    """Application settings."""

    # CORS (Vite dev ports)
    ALLOWED_ORIGINS = ["http://localhost:5173", "http://localhost:5174"]

    # Request limits
    MAX_ITINERARY_CHARS = 20000

    # Server
    HOST = "127.0.0.1"
    PORT = 8000


# Global settings instance
settings = Settings()
