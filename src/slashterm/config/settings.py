"""Configuration settings loaded from YAML or environment."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import urlparse

import yaml
from dotenv import find_dotenv, load_dotenv

from .paths import SlashtermPaths

logger = logging.getLogger(__name__)

DEFAULT_MODEL_URL = (
    "https://huggingface.co/unsloth/Qwen3-0.6B-GGUF/resolve/main/Qwen3-0.6B-Q8_0.gguf"
)

DEFAULT_SYSTEM_PROMPT = """You are a small language model running locally in a terminal.

## Voice & Tone
- Reply in lower case, short lines, candid and breezy.
- Stay playful but keep it sharp.
- Keep everything in English."""


def _read_yaml(path: Path) -> dict:
    """Read a YAML file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is malformed.
    """
    if not path.exists():
        return {}
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            return {}
        return data
    except yaml.YAMLError as e:
        logger.warning(f"Malformed YAML in {path}: {e}")
        return {}
    except OSError as e:
        logger.warning(f"Cannot read {path}: {e}")
        return {}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings loaded from YAML config or environment variables."""

    # Model
    model_name: str = "ai model"
    model_size_mb: float = 639
    model_url: str = DEFAULT_MODEL_URL

    # OpenAI-compatible server that serves the cached model
    server_base_url: str = "http://127.0.0.1:8080/v1"
    server_api_key: str = "local"
    server_model: str = "local"

    # Chat
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    temperature: float = 1.0
    thinking: bool = False

    # Console
    implicit_chat: bool = True

    # Paths (set after loading)
    models_dir: Path = field(default_factory=Path)
    log_dir: Path = field(default_factory=Path)

    @property
    def model_filename(self) -> str:
        """File name of the cached model, taken from the download URL."""
        name = Path(urlparse(self.model_url).path).name
        return name or "model.gguf"

    @classmethod
    def load(cls, paths: SlashtermPaths | None = None, env_path: Path | None = None) -> "Settings":
        """
        Load settings with fallback chain:
        1. YAML config file (if it exists)
        2. Environment variables
        3. Defaults
        """
        paths = paths or SlashtermPaths()
        if paths.config_exists():
            return cls._load_from_yaml(paths)
        return cls._load_from_env(paths, env_path)

    @classmethod
    def _load_from_yaml(cls, paths: SlashtermPaths) -> "Settings":
        """Load settings from the YAML config file."""
        config_file = paths.config_file
        logger.info(f"Loading settings from {config_file}")

        config = _read_yaml(config_file)
        model_config = config.get("model") or {}
        server_config = config.get("server") or {}
        chat_config = config.get("chat") or {}
        console_config = config.get("console") or {}

        defaults = cls()
        settings = cls(
            # Model
            model_name=model_config.get("name", defaults.model_name),
            model_size_mb=model_config.get("size_mb", defaults.model_size_mb),
            model_url=model_config.get("url", defaults.model_url),

            # Server, API key may come from the environment
            server_base_url=server_config.get("base_url", defaults.server_base_url),
            server_api_key=(
                server_config.get("api_key")
                or os.getenv("SLASHTERM_API_KEY", defaults.server_api_key)
            ),
            server_model=server_config.get("model", defaults.server_model),

            # Chat
            system_prompt=chat_config.get("system_prompt", defaults.system_prompt),
            temperature=chat_config.get("temperature", defaults.temperature),
            thinking=chat_config.get("thinking", defaults.thinking),

            # Console
            implicit_chat=console_config.get("implicit_chat", defaults.implicit_chat),

            models_dir=paths.models_dir,
            log_dir=paths.log_dir,
        )

        logger.info(f"Settings loaded: model={settings.model_name}, server={settings.server_base_url}")
        return settings

    @classmethod
    def _load_from_env(cls, paths: SlashtermPaths, env_path: Path | None = None) -> "Settings":
        """Load settings from environment variables (and a .env file)."""
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv(find_dotenv(usecwd=True))

        defaults = cls()
        settings = cls(
            # Model
            model_name=os.getenv("SLASHTERM_MODEL_NAME", defaults.model_name),
            model_size_mb=float(os.getenv("SLASHTERM_MODEL_SIZE_MB", str(defaults.model_size_mb))),
            model_url=os.getenv("SLASHTERM_MODEL_URL", defaults.model_url),

            # Server
            server_base_url=os.getenv("SLASHTERM_SERVER_URL", defaults.server_base_url),
            server_api_key=os.getenv("SLASHTERM_API_KEY", defaults.server_api_key),
            server_model=os.getenv("SLASHTERM_SERVER_MODEL", defaults.server_model),

            # Chat
            temperature=float(os.getenv("SLASHTERM_TEMPERATURE", str(defaults.temperature))),
            thinking=_env_bool("SLASHTERM_THINKING", defaults.thinking),

            # Console
            implicit_chat=_env_bool("SLASHTERM_IMPLICIT_CHAT", defaults.implicit_chat),

            models_dir=paths.models_dir,
            log_dir=paths.log_dir,
        )

        logger.info(f"Settings loaded: model={settings.model_name}, server={settings.server_base_url}")
        return settings

    def validate(self) -> list[str]:
        """Validate settings and return list of errors."""
        errors = []

        if not self.model_url.startswith(("http://", "https://")):
            errors.append(f"model.url must be an http(s) URL: {self.model_url}")

        if self.model_size_mb <= 0:
            errors.append("model.size_mb must be positive")

        if not self.server_base_url.startswith(("http://", "https://")):
            errors.append(f"server.base_url must be an http(s) URL: {self.server_base_url}")

        if not 0 <= self.temperature <= 2:
            errors.append("chat.temperature must be 0-2")

        return errors
