"""Settings for the backend service."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    mongodb_uri: str = Field("", validation_alias="MONGODB_URI")
    database_name: str = Field("remotecyberhelp", validation_alias="DATABASE_NAME")
    contact_collection: str = Field("contact_forms", validation_alias="CONTACT_COLLECTION")

    # Driver pool and timeouts; sockets idle past socket_timeout_ms are closed by the driver.
    max_pool_size: int = Field(10, validation_alias="MONGO_MAX_POOL_SIZE")
    server_selection_timeout_ms: int = Field(10_000, validation_alias="MONGO_SERVER_SELECTION_TIMEOUT_MS")
    socket_timeout_ms: int = Field(45_000, validation_alias="MONGO_SOCKET_TIMEOUT_MS")

    readiness_ping_timeout_seconds: float = Field(5.0, validation_alias="READINESS_PING_TIMEOUT_SECONDS")

    environment: str = Field("development", validation_alias="ENVIRONMENT")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(3001, validation_alias="PORT")
