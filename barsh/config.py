from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from barsh.errors import ConfigError
from barsh.llm import DEFAULT_ENDPOINT, resolve_endpoint

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    query: str
    endpoint: str = DEFAULT_ENDPOINT
    model: str | None = None
    max_response_chars: int | None = None
    plugin_dir: str = ".barsh"
    log_file: str | None = None
    log_level: str = "INFO"
    escdelay: int = 25  # ms curses waits after ESC before giving up on a sequence

    @staticmethod
    def from_args(args, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ

        def pick(flag, var, default=None):
            value = getattr(args, flag, None)
            if value is None: value = env.get(var) or None
            return default if value is None else value

        max_chars = pick("max_response_chars", "BARSH_MAX_RESPONSE_CHARS")
        try:
            max_chars = int(max_chars) if max_chars is not None else None
        except ValueError:
            raise ConfigError(f"BARSH_MAX_RESPONSE_CHARS must be an integer, got {max_chars!r}") from None

        settings = Settings(
            query=" ".join(getattr(args, "query", None) or []).strip(),
            endpoint=resolve_endpoint(pick("endpoint", "BARSH_ENDPOINT", DEFAULT_ENDPOINT)).name,
            model=pick("model", "BARSH_MODEL"),
            max_response_chars=max_chars,
            plugin_dir=pick("plugin_dir", "BARSH_PLUGIN_DIR", ".barsh"),
            log_file=pick("log_file", "BARSH_LOG_FILE"),
            log_level=str(pick("log_level", "BARSH_LOG_LEVEL", "INFO")).upper(),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        if not self.query:
            raise ConfigError("Please add an input, e.g. `barsh -l local what's the time` or `barsh list all files`")
        if self.max_response_chars is not None and self.max_response_chars <= 0:
            raise ConfigError("max_response_chars must be > 0")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        if self.escdelay < 0:
            raise ConfigError("escdelay must be >= 0")


def configure_logging(settings: Settings) -> None:
    '''
    The full-screen ui owns the terminal, so logs only go to a file, if asked for.
    '''
    root = logging.getLogger("barsh")
    if not settings.log_file:
        return
    handler = logging.FileHandler(settings.log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(settings.log_level)
