from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    service_name: str = Field(default="Ultra Earning Engine Backend API", alias="SERVICE_NAME")
    service_version: str = Field(default="1.0.0", alias="SERVICE_VERSION")
    cors_allow_origins: list[str] = Field(default=["*"], alias="CORS_ALLOW_ORIGINS")

    hourly_rate_min: float = Field(default=15.0, alias="HOURLY_RATE_MIN")
    hourly_rate_max: float = Field(default=25.0, alias="HOURLY_RATE_MAX")

    @property
    def hourly_rate_range(self) -> tuple[float, float]:
        return (self.hourly_rate_min, self.hourly_rate_max)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
