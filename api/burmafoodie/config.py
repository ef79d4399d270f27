from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

VERSION = "0.1.0"


class Settings(BaseSettings):
    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "info"

    # Claude API
    anthropic_api_key: str = ""
    claude_model: str = "claude-3-5-haiku-20241022"
    claude_max_tokens: int = 2048
    claude_temperature: float = 0.2

    # Response language when the client does not pick one (empty = detect)
    default_language: str = ""

    # Monitoring
    prometheus_enabled: bool = True

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Client
    recipe_api_url: str = "http://localhost:8000/api/v1/recipe"
    client_timeout_s: float | None = None
    history_path: Path = Path.home() / ".burmafoodie" / "storage.json"

    model_config = {
        "env_file": ["../.env", ".env"],
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
