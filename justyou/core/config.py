# justyou/core/config.py
from typing import Optional
from pydantic import AnyUrl
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    # the relay has always listened on 4000; PORT overrides it
    PORT: int = 4000
    CORS_ORIGINS: str = "*"

    # Auth (tokens are issued by the identity provider, we only verify them)
    SECRET_KEY: str = "change-me"  # override in .env / secrets
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    # owner of the goal boards and moderator for stories
    ADMIN_EMAIL: Optional[str] = None

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017/justyou"
    MONGODB_DB: str = "justyou"

    # Provider (Anthropic Messages API)
    CLAUDE_API_KEY: Optional[str] = None
    CLAUDE_API_URL: str = "https://api.anthropic.com/v1/messages"
    CLAUDE_API_VERSION: str = "2023-06-01"
    CLAUDE_MODEL: str = "claude-3-haiku-20240307"
    CLAUDE_MAX_TOKENS: int = 1024

    # LLM adapter selection: 'anthropic' or 'mock'
    LLM_ADAPTER: str = "anthropic"
    LLM_TIMEOUT_SEC: float = 60.0
    LLM_RETRIES: int = 0
    LLM_BACKOFF_FACTOR: float = 0.5
    # allow fallback to mock adapter when the provider call fails
    LLM_ALLOW_FALLBACK: bool = False

    # When set, the prompt wrapper talks to a remote relay instead of the
    # in-process one, e.g. http://localhost:4000
    RELAY_URL: Optional[AnyUrl] = None

    # Analytics
    MIXPANEL_TOKEN: Optional[str] = None
    MIXPANEL_API_URL: str = "https://api.mixpanel.com/track"

    # S3 / R2
    S3_PROVIDER: str = "cloudflare"
    S3_BUCKET: Optional[str] = None
    S3_ENDPOINT: Optional[AnyUrl] = None
    S3_REGION: Optional[str] = None
    S3_ACCESS_KEY: Optional[str] = None
    S3_SECRET_KEY: Optional[str] = None

    # MinIO dev fallback
    MINIO_ENDPOINT: Optional[str] = None
    MINIO_ACCESS_KEY: Optional[str] = None
    MINIO_SECRET_KEY: Optional[str] = None

    LOCAL_UPLOAD_DIR: str = "uploads"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # LaTeX resume rendering
    LATEX_COMPILE_TIMEOUT: int = 20
    LATEX_MAX_PDF_BYTES: int = 10 * 1024 * 1024

    # Pydantic v2 settings: read from .env file
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

# single shared settings instance
settings = Settings()
