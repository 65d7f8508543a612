# kasir_api/config.py

from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="KASIR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = Field(default="Kasir API")
    api_version: str = Field(default="1.0.0")

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8085)
    api_prefix: str = Field(default="/api")

    log_level: str = Field(default="INFO")

    # Empty means the in-memory store; otherwise a SQLite file path.
    database_path: str = Field(default="")

    cors_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    # Exposes POST {api_prefix}/reset for demos and the terminal client.
    enable_reset: bool = Field(default=True)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_origins(cls, v):
        if v is None:
            return ["*"]
        if isinstance(v, list):
            return [str(x).strip() for x in v if str(x).strip()]
        s = str(v).strip()
        if not s:
            return ["*"]
        return [part.strip() for part in s.split(",") if part.strip()]

    @field_validator("api_prefix", mode="before")
    @classmethod
    def _normalize_prefix(cls, v):
        s = str(v or "").strip().rstrip("/")
        if s and not s.startswith("/"):
            s = "/" + s
        return s


def get_settings() -> Settings:
    return Settings()
