# config.py

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from errors import ConfigError

BASE_DIR = Path(__file__).resolve().parent

SOURCES = ("api", "local")
LANGS = ("en", "bg")
THEME_NAMES = ("light", "dark", "night")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Settings:
    source: str = "api"
    api_url: str = "http://localhost:3000"
    timeout: float = 10.0
    db_path: Path = BASE_DIR / "films.db"
    seed_file: Optional[Path] = None
    tickets_dir: Path = BASE_DIR / "tickets"
    print_tickets: bool = True
    lang: str = "en"
    theme: str = "light"
    log_file: Path = BASE_DIR / "films_client.log"
    log_level: str = "INFO"

    def validated(self) -> "Settings":
        if self.source not in SOURCES:
            raise ConfigError(f"Unknown source '{self.source}', expected one of {SOURCES}")
        if not self.api_url.startswith(("http://", "https://")):
            raise ConfigError(f"API url must start with http:// or https://, got '{self.api_url}'")
        if self.timeout <= 0:
            raise ConfigError("Timeout must be positive")
        if self.lang not in LANGS:
            raise ConfigError(f"Unknown language '{self.lang}'")
        if self.theme not in THEME_NAMES:
            raise ConfigError(f"Unknown theme '{self.theme}'")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level '{self.log_level}'")
        return replace(self, log_level=self.log_level.upper())


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean, got '{value}'")


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got '{value}'") from None


def load_settings(environ: Optional[Mapping[str, str]] = None, **overrides) -> Settings:
    """
    Reads FILMS_* variables from the environment.

    Keyword overrides (from the command line) win over the environment;
    ``None`` overrides are ignored.
    """
    env = os.environ if environ is None else environ
    settings = Settings()
    values = {}

    if "FILMS_SOURCE" in env:
        values["source"] = env["FILMS_SOURCE"].strip().lower()
    if "FILMS_API_URL" in env:
        values["api_url"] = env["FILMS_API_URL"].strip()
    if "FILMS_TIMEOUT" in env:
        values["timeout"] = _parse_float("FILMS_TIMEOUT", env["FILMS_TIMEOUT"])
    if "FILMS_DB" in env:
        values["db_path"] = Path(env["FILMS_DB"])
    if env.get("FILMS_SEED"):
        values["seed_file"] = Path(env["FILMS_SEED"])
    if "FILMS_TICKETS_DIR" in env:
        values["tickets_dir"] = Path(env["FILMS_TICKETS_DIR"])
    if "FILMS_PRINT_TICKETS" in env:
        values["print_tickets"] = _parse_bool("FILMS_PRINT_TICKETS", env["FILMS_PRINT_TICKETS"])
    if "FILMS_LANG" in env:
        values["lang"] = env["FILMS_LANG"].strip().lower()
    if "FILMS_THEME" in env:
        values["theme"] = env["FILMS_THEME"].strip().lower()
    if "FILMS_LOG_FILE" in env:
        values["log_file"] = Path(env["FILMS_LOG_FILE"])
    if "FILMS_LOG_LEVEL" in env:
        values["log_level"] = env["FILMS_LOG_LEVEL"].strip()

    for key, value in overrides.items():
        if value is None:
            continue
        if key in ("db_path", "seed_file", "tickets_dir", "log_file"):
            value = Path(value)
        values[key] = value
    return replace(settings, **values).validated()
