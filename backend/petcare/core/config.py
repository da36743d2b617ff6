"""Module: config."""

from pydantic_settings import BaseSettings, SettingsConfigDict


# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # SQLAlchemy connection string, e.g. mysql+pymysql://user:pw@host/db
    database_url: str = "sqlite:///./petcare.db"
    # Echo SQL statements to the log (local debugging only).
    sql_echo: bool = False

    # Signing key for access tokens. Override in every deployed environment.
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7
    # PBKDF2 work factor for newly stored passwords.
    password_iterations: int = 390000

    # Origins allowed to call the API from a browser/dev server.
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # Configure pydantic-settings to also load values from local .env file.
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
