import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Config:
    # Base paths
    BASE_DIR = Path(__file__).parent.parent

    # Gemini API (MY_API_KEY is the name older deployments used)
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY") or os.getenv("MY_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TEMPERATURE: float = float(os.getenv("GEMINI_TEMPERATURE", "0.7"))

    # Persona
    ASSISTANT_NAME: str = os.getenv("ASSISTANT_NAME", "Riyaz Assistant")

    # Server
    PORT: int = int(os.getenv("PORT", "3000"))
    FLASK_ENV: str = os.getenv("FLASK_ENV", "development")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Slow query logging (only active in development/debug mode)
    SLOW_QUERY_THRESHOLD_MS: int = int(os.getenv("SLOW_QUERY_THRESHOLD_MS", "100"))

    # Database
    DATABASE_PATH: Path = BASE_DIR / os.getenv("DATABASE_PATH", "data/memory.db")

    # Browser chat UI
    STATIC_DIR: Path = BASE_DIR / os.getenv("STATIC_DIR", "frontend")

    @classmethod
    def is_development(cls) -> bool:
        """Check if running in development mode."""
        return cls.FLASK_ENV == "development"

    @classmethod
    def is_testing(cls) -> bool:
        """Check if running in testing mode."""
        return cls.FLASK_ENV == "testing"

    @classmethod
    def is_offline(cls) -> bool:
        """Check if replies are simulated because no Gemini credential is set."""
        return not cls.GEMINI_API_KEY

    @classmethod
    def validate(cls) -> list[str]:
        """Validate configuration. Returns list of errors with clear guidance.

        A missing GEMINI_API_KEY is not an error: the service falls back to
        canned offline replies instead.
        """
        errors: list[str] = []

        if cls.PORT < 1 or cls.PORT > 65535:
            errors.append(f"PORT must be between 1 and 65535, got {cls.PORT}")

        if not 0.0 <= cls.GEMINI_TEMPERATURE <= 2.0:
            errors.append(
                f"GEMINI_TEMPERATURE must be between 0.0 and 2.0, got {cls.GEMINI_TEMPERATURE}"
            )

        if not cls.ASSISTANT_NAME.strip():
            errors.append("ASSISTANT_NAME must not be empty")

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if cls.LOG_LEVEL not in valid_log_levels:
            errors.append(
                f"LOG_LEVEL '{cls.LOG_LEVEL}' is not valid. "
                f"Valid levels: {', '.join(sorted(valid_log_levels))}"
            )

        return errors
