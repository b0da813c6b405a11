"""
Configuration and constants for the Workout Builder service.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings loaded from environment variables."""

    # Server Configuration
    PORT: int = int(os.getenv("PORT", 10000))
    HOST: str = "0.0.0.0"

    # Shared secret expected from the upstream server
    INTERNAL_API_SECRET: str = os.getenv("INTERNAL_API_SECRET", "")

    # Storage
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./workouts.db")
    REDIS_URL: str = os.getenv("REDIS_URL", os.getenv("KV_URL", "redis://localhost:6379/0"))

    # Short links
    SHARE_KEY_PREFIX: str = "workout:"
    SHORT_ID_LENGTH: int = int(os.getenv("SHORT_ID_LENGTH", 6))
    # In-process store when Redis is down; on by default only without a configured Redis
    SHARE_MEMORY_FALLBACK: bool = _env_flag(
        "SHARE_MEMORY_FALLBACK",
        "false" if (os.getenv("REDIS_URL") or os.getenv("KV_URL")) else "true",
    )

    # Performance history
    HISTORY_TOP_N: int = 5

    # Exercise library
    CATALOG_PATH: str = os.getenv(
        "CATALOG_PATH",
        str(Path(__file__).resolve().parent.parent / "data" / "exercises.json"),
    )

    # Rate limiting (disabled in tests)
    RATE_LIMIT_ENABLED: bool = _env_flag("RATE_LIMIT_ENABLED")

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration on startup."""
        problems = []

        if cls.SHORT_ID_LENGTH < 4:
            problems.append("SHORT_ID_LENGTH must be at least 4")

        if not Path(cls.CATALOG_PATH).is_file():
            problems.append(f"CATALOG_PATH does not exist: {cls.CATALOG_PATH}")

        if problems:
            raise ValueError(
                f"Invalid configuration: {'; '.join(problems)}. "
                "Please check your .env file."
            )


settings = Settings()
