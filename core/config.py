"""Configuration models and loading."""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

CONFIG_DIR = Path.home() / ".config" / "openai-key-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"

API_KEY_ENV = "OPENAI_API_KEY"
BASE_URL_ENV = "OPENAI_BASE_URL"


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8080
    path: str = "/.netlify/functions/openai-proxy"
    debug: bool = True


class UpstreamSettings(BaseModel):
    base_url: str = "https://api.openai.com"
    chat_path: str = "/v1/chat/completions"
    api_key: str = ""
    timeout: float = 300.0

    @property
    def chat_url(self) -> str:
        return self.base_url.rstrip("/") + self.chat_path


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)


def load_config(path: Path = CONFIG_FILE, environ: dict[str, str] | None = None) -> Config:
    """Load configuration from JSON file (if any), then apply environment overrides."""
    config = _read_config_file(path)
    env = os.environ if environ is None else environ

    api_key = env.get(API_KEY_ENV)
    if api_key:
        config.upstream.api_key = api_key
    base_url = env.get(BASE_URL_ENV)
    if base_url:
        config.upstream.base_url = base_url
    return config


def write_default_config(path: Path = CONFIG_FILE) -> Config:
    """Write a default config file, keeping any existing one."""
    if path.exists():
        return _read_config_file(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    default = Config()
    path.write_text(default.model_dump_json(indent=2))
    return default


def _read_config_file(path: Path) -> Config:
    if not path.exists():
        return Config()

    try:
        data = json.loads(path.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and fall back to defaults
        backup = path.with_suffix(".json.bak")
        path.rename(backup)
        return Config()
