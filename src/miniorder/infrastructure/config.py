"""Runtime settings, read from the environment (and a ``.env`` file).

Values passed explicitly (e.g. from CLI options) win over environment
variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "MINIORDER_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(ValueError):
    """Settings are missing or invalid."""


@dataclass(frozen=True)
class Settings:
    order_service_url: str
    shipping_service_url: str
    labels_dir: Path = Path("labels")
    label_extension: str = "html"
    http_timeout: float = 30.0
    log_level: str = "WARNING"

    @staticmethod
    def from_env(
        order_service_url: str | None = None,
        shipping_service_url: str | None = None,
        labels_dir: str | Path | None = None,
        label_extension: str | None = None,
        http_timeout: float | None = None,
        log_level: str | None = None,
    ) -> Settings:
        """Build settings from arguments, falling back to MINIORDER_* variables."""
        load_dotenv(find_dotenv(usecwd=True))

        order_url = order_service_url or _env("ORDER_SERVICE_URL")
        shipping_url = shipping_service_url or _env("SHIPPING_SERVICE_URL")
        if not order_url or not shipping_url:
            raise ConfigurationError(
                f"{ENV_PREFIX}ORDER_SERVICE_URL and {ENV_PREFIX}SHIPPING_SERVICE_URL "
                "must be set either as options or in a .env file."
            )

        timeout = http_timeout
        if timeout is None:
            raw_timeout = _env("HTTP_TIMEOUT", "30")
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(
                    f"{ENV_PREFIX}HTTP_TIMEOUT must be a number, got {raw_timeout!r}"
                ) from exc
        if timeout <= 0:
            raise ConfigurationError("HTTP timeout must be positive")

        level = (log_level or _env("LOG_LEVEL", "WARNING")).upper()
        if level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level {level!r}; expected one of {', '.join(_LOG_LEVELS)}"
            )

        extension = (label_extension or _env("LABEL_EXTENSION", "html")).lstrip(".")
        if not extension:
            raise ConfigurationError("Label file extension cannot be empty")

        return Settings(
            order_service_url=order_url,
            shipping_service_url=shipping_url,
            labels_dir=Path(labels_dir or _env("LABELS_DIR", "labels")),
            label_extension=extension,
            http_timeout=timeout,
            log_level=level,
        )


def _env(name: str, default: str = "") -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default)
