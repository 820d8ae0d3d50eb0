import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables only for local development
if os.path.exists(".env"):
    load_dotenv()

DEFAULT_DB_PATH = os.path.join("data", "strings.db")


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    db_path: str = DEFAULT_DB_PATH
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def get_settings() -> Settings:
    """Read settings from the environment"""
    return Settings(
        db_path=os.getenv("STRINGS_DB_PATH", DEFAULT_DB_PATH),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", 8000)),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
    )
