from functools import lru_cache
from typing import Annotated
from urllib.parse import quote_plus

from pydantic import Field, StringConstraints, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Names and hosts are trimmed; credentials are passed through exactly as given
NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

class Settings(BaseSettings):
    APP_NAME: str = "workout-manager"

    # Full URI wins over the host/credential parts (handy for a local mongod)
    DB_URI: str | None = None
    DB_HOST: Annotated[str, StringConstraints(strip_whitespace=True)] | None = None
    DB_USERNAME: str | None = None
    DB_USER_PASSWORD: str | None = None

    DB_DATABASE_NAME: NameStr
    DB_AUTH_COLLECTION: NameStr = "users"
    DB_TRAININGS_COLLECTION: NameStr = "trainings"

    # Per-call budgets, seconds
    AUTH_TIMEOUT_SECONDS: float = Field(default=10, gt=0)
    TRAININGS_TIMEOUT_SECONDS: float = Field(default=5, gt=0)
    HEALTH_TIMEOUT_SECONDS: float = Field(default=1, gt=0)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @model_validator(mode="after")
    def require_connection_parts(self) -> "Settings":
        if self.DB_URI:
            return self
        missing = [
            name for name in ("DB_HOST", "DB_USERNAME", "DB_USER_PASSWORD")
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ValueError(f"missing database settings: {', '.join(missing)}")
        return self

    @property
    def MONGO_URI(self) -> str:
        if self.DB_URI:
            return self.DB_URI
        return (
            f"mongodb+srv://{quote_plus(self.DB_USERNAME)}:{quote_plus(self.DB_USER_PASSWORD)}"
            f"@{self.DB_HOST}/?retryWrites=true&w=majority&appName={quote_plus(self.APP_NAME)}"
        )

@lru_cache
def get_settings() -> Settings:
    return Settings()
