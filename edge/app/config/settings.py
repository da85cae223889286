from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    supabase_url: str = Field(..., validation_alias="SUPABASE_URL")
    supabase_service_role_key: str = Field(..., validation_alias="SUPABASE_SERVICE_ROLE_KEY")
    supabase_timeout_seconds: float = Field(10.0, validation_alias="SUPABASE_TIMEOUT_SECONDS")
    baas_backend: str = Field("supabase", validation_alias="BAAS_BACKEND")

    schema_init_rpc: str = Field("initialize_complete_schema", validation_alias="SCHEMA_INIT_RPC")
    seed_rpc: str = Field("seed_services_and_packages", validation_alias="SEED_RPC")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    host: str = Field("0.0.0.0", validation_alias="HOST")
    port: int = Field(8000, validation_alias="PORT")
