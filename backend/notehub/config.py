# notehub/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "NoteHub API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))

    # CORS origins for frontend
    CORS_ORIGINS: list[str] = _env_list("CORS_ORIGINS", [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ])

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite://notehub.sqlite3")
    # Create tables on startup (development only; use Aerich migrations otherwise)
    db_generate_schemas: bool = _env_flag("DB_GENERATE_SCHEMAS")

    # GitHub contents API (blob store)
    github_token: str | None = os.getenv("GITHUB_TOKEN")
    github_owner: str | None = os.getenv("GITHUB_OWNER")
    github_repo: str | None = os.getenv("GITHUB_REPO")
    github_branch: str = os.getenv("GITHUB_BRANCH", "main")
    github_api_url: str = os.getenv("GITHUB_API_URL", "https://api.github.com")
    github_raw_url: str = os.getenv("GITHUB_RAW_URL", "https://raw.githubusercontent.com")
    blob_timeout_seconds: float = float(os.getenv("BLOB_TIMEOUT_SECONDS", "60"))

    # Upload limits
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))  # 10MB
    # How long uploads are refused after the blob store reports an exhausted quota
    quota_cooldown_seconds: int = int(os.getenv("QUOTA_COOLDOWN_SECONDS", "3600"))

    # Channel join codes
    channel_code_length: int = int(os.getenv("CHANNEL_CODE_LENGTH", "10"))
    channel_code_max_attempts: int = int(os.getenv("CHANNEL_CODE_MAX_ATTEMPTS", "20"))


settings = Settings()  # Instantiate configuration
