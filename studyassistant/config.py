from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    app_name: str = "Lecture Study Assistant"
    app_env: str = Field("dev", alias="APP_ENV")
    api_prefix: str = Field("/api", alias="API_PREFIX")
    client_url: str = Field("http://localhost:5173", alias="CLIENT_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    secret_key: str = Field(default=None, alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(60 * 24, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    database_url: str = Field(default=None, alias="DATABASE_URL")

    llm_provider: str = Field("openai", alias="LLM_PROVIDER")
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(default=None, alias="OPENAI_BASE_URL")
    llm_model: str = Field("gpt-3.5-turbo", alias="LLM_MODEL")
    ollama_base_url: str | None = Field("http://localhost:11434", alias="OLLAMA_BASE_URL")
    llm_timeout_seconds: float = Field(60, alias="LLM_TIMEOUT_SECONDS")

    storage_backend: str = Field("local", alias="STORAGE_BACKEND")
    upload_dir: str = Field("./uploads", alias="UPLOAD_DIR")
    s3_bucket: str | None = Field(default=None, alias="S3_BUCKET")
    s3_region: str = Field("eu-west-1", alias="AWS_REGION")
    s3_prefix: str = Field("lectures", alias="S3_PREFIX")
    max_upload_mb: int = Field(10, alias="MAX_UPLOAD_MB")

    rate_limit_window_seconds: int = Field(15 * 60, alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_max_calls: int = Field(100, alias="RATE_LIMIT_MAX_CALLS")
    generation_rate_limit_max_calls: int = Field(20, alias="GENERATION_RATE_LIMIT_MAX_CALLS")

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
