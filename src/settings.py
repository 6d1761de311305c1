# src/settings.py
import os
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # core
    APP_NAME: str = Field(default="PostCraft AI")
    ENV: str = Field(default=os.getenv("APP_ENV", "dev"))
    DEBUG: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # model engine: groq | openai | echo
    ENGINE: str = Field(default="groq")

    # secrets
    GROQ_API_KEY: Optional[str] = None
    OPENAI_API_KEY: Optional[str] = None

    # endpoints
    GROQ_BASE_URL: str = Field(default="https://api.groq.com/openai/v1")
    OPENAI_BASE_URL: Optional[str] = None

    # assistant chats kept in memory; oldest idle one is evicted past this
    MAX_CHAT_SESSIONS: int = Field(default=256, ge=1)

    # seconds; None waits for the provider indefinitely
    REQUEST_TIMEOUT: Optional[float] = None

    # read root-level .env.dev
    model_config = SettingsConfigDict(
        env_file=".env.dev",
        extra="ignore",
    )

    @property
    def app_name(self) -> str:
        return self.APP_NAME


settings = Settings()
