import os

from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")


class Settings:
    """Runtime settings, read from the environment on every access."""

    @property
    def database_url(self) -> str:
        return os.getenv("DATABASE_URL", "sqlite:///./notekeeper.db")

    @property
    def jwt_secret(self) -> str | None:
        return os.getenv("JWT_SECRET")

    @property
    def jwt_ttl_seconds(self) -> int:
        return int(os.getenv("JWT_TTL_SECONDS", "3600"))

    @property
    def argon2_time_cost(self) -> int:
        return int(os.getenv("ARGON2_TIME_COST", "3"))

    @property
    def argon2_memory_cost(self) -> int:
        return int(os.getenv("ARGON2_MEMORY_COST", "262144"))

    @property
    def argon2_parallelism(self) -> int:
        return int(os.getenv("ARGON2_PARALLELISM", "1"))

    @property
    def log_level(self) -> str:
        return os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def seed_password(self) -> str:
        return os.getenv("SEED_PASSWORD", "123")

    @property
    def cors_origins(self) -> list[str]:
        raw = os.getenv("CORS_ORIGINS", "*")
        return [o.strip() for o in raw.split(",") if o.strip()]


settings = Settings()
