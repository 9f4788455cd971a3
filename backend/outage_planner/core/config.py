from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod|test
    LOG_LEVEL: str = Field(default="INFO")
    TZ: str = Field(default="Asia/Bangkok")

    # Security
    JWT_SECRET: str = Field(default="change-me")
    JWT_ALG: str = Field(default="HS256")
    JWT_EXPIRES_MIN: int = Field(default=60 * 12)

    # DB
    DATABASE_URL: str = Field(default="postgresql+psycopg://app:app@db:5432/app")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:3000,http://localhost")

    # Scheduling rules
    MIN_LEAD_DAYS: int = Field(default=10)

    # Import limits
    IMPORT_MAX_FILE_BYTES: int = Field(default=10 * 1024 * 1024)
    IMPORT_MAX_ROWS_CSV: int = Field(default=1000)
    IMPORT_MAX_ROWS_XLSX: int = Field(default=1000)
    IMPORT_ERROR_REPORT_LIMIT: int = Field(default=10)
    TRANSFORMER_SEARCH_LIMIT: int = Field(default=10)

    # Seed (dev)
    SEED_DEMO: bool = Field(default=True)


settings = Settings()
