# llm_proxy/settings.py
from typing import List, Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="LLM Proxy")
    ENV: str = Field(default="dev", validation_alias=AliasChoices("APP_ENV", "ENV"))
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # upstream model API
    UPSTREAM_API_KEY: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("UPSTREAM_API_KEY", "GROQ_API_KEY", "OPENAI_API_KEY"),
    )
    UPSTREAM_BASE_URL: str = Field(default="https://api.groq.com/openai/v1")
    UPSTREAM_CLIENT: Optional[Literal["http", "openai", "echo"]] = None
    UPSTREAM_TIMEOUT: float = Field(default=60.0, gt=0)

    # generation defaults
    DEFAULT_MODEL: str = Field(default="llama-3.1-8b-instant")
    TRANSCRIPTION_MODEL: str = Field(default="whisper-large-v3")
    ENDPOINTS_CONFIG: Optional[str] = None

    # serving
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # optional shared secret for callers
    PROXY_SECRET: Optional[str] = None
    PROXY_SECRET_HEADER: str = Field(default="x-proxy-secret")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME

    @property
    def client_kind(self) -> str:
        """Resolved model client: explicit choice, else http with a key, else echo."""
        if self.UPSTREAM_CLIENT:
            return self.UPSTREAM_CLIENT
        return "http" if self.UPSTREAM_API_KEY else "echo"


settings = Settings()
