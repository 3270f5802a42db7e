"""Where slashterm keeps its config file, model cache and logs."""

from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

APP_NAME = "slashterm"


class SlashtermPaths:
    """
    Config lives under the user config dir (``config.yaml``). Downloaded
    models and the log file live under the user cache dir.
    """

    def __init__(self, config_dir: Path | None = None, cache_dir: Path | None = None):
        self._config_dir = config_dir or Path(user_config_dir(APP_NAME, appauthor=False))
        self._cache_dir = cache_dir or Path(user_cache_dir(APP_NAME, appauthor=False))

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    @property
    def config_file(self) -> Path:
        return self._config_dir / "config.yaml"

    @property
    def models_dir(self) -> Path:
        """GGUF files fetched by /download (``<cache>/models``)."""
        return self._cache_dir / "models"

    @property
    def log_dir(self) -> Path:
        return self._cache_dir / "logs"

    def ensure_directories(self) -> None:
        for directory in (self._config_dir, self.models_dir, self.log_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def config_exists(self) -> bool:
        return self.config_file.exists()
