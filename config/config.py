import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Backend API
    api_base_url: str = os.getenv("LITERASI_API_URL", "http://localhost:3000")
    request_timeout: float = float(os.getenv("LITERASI_TIMEOUT", "10"))
    connect_timeout: float = float(os.getenv("LITERASI_CONNECT_TIMEOUT", "5"))
    # Applies to GET requests only; mutations are never retried
    request_retries: int = int(os.getenv("LITERASI_RETRIES", "3"))
    retry_backoff: float = float(os.getenv("LITERASI_RETRY_BACKOFF", "0.5"))

    # Session
    session_file: str = os.getenv(
        "LITERASI_SESSION_FILE",
        str(Path.home() / ".literasi-admin" / "session.json"),
    )

    # CLI output: plain | json | rich
    output_mode: str = os.getenv("LITERASI_OUTPUT", "plain")

    # Application
    app_name: str = os.getenv("APP_NAME", "Koperasi Literasi Admin")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")
    debug: bool = _env_flag("DEBUG")


settings = Settings()
