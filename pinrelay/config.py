"""Configuration for environment variables and runtime knobs.

Builds one immutable ``Config`` value at startup from a ``.env`` file and the
process environment. The rest of the codebase receives that value explicitly
and never reads the environment itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import dotenv_values

DEFAULT_ENV_FILE = ".env"
DEFAULT_MAX_FORM_BYTES = 10 << 20  # 10 MiB
DEFAULT_PORT = 9000

REQUIRED_KEYS = ("PINATA_API_KEY", "PINATA_API_SECRET", "PINATA_API_URL")


class ConfigError(RuntimeError):
    """Raised when the configuration source is missing or incomplete."""


@dataclass(frozen=True)
class Config:
    # Pinata credentials and endpoint
    api_key: str
    api_secret: str = field(repr=False)
    api_url: str

    # Upload limits
    max_form_bytes: int = DEFAULT_MAX_FORM_BYTES
    max_concurrent_uploads: Optional[int] = None

    # Server
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]]) -> "Config":
        """Build a config from a flat mapping of environment-style keys."""
        missing = [k for k in REQUIRED_KEYS if not (values.get(k) or "").strip()]
        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")

        max_workers = _int_value(values, "MAX_CONCURRENT_UPLOADS", None)
        if max_workers is not None and max_workers < 1:
            raise ConfigError("MAX_CONCURRENT_UPLOADS must be a positive integer")

        return cls(
            api_key=values["PINATA_API_KEY"].strip(),
            api_secret=values["PINATA_API_SECRET"].strip(),
            api_url=values["PINATA_API_URL"].strip(),
            max_form_bytes=_int_value(values, "MAX_FORM_BYTES", DEFAULT_MAX_FORM_BYTES),
            max_concurrent_uploads=max_workers,
            host=values.get("HOST") or "0.0.0.0",
            port=_int_value(values, "PORT", DEFAULT_PORT),
            log_level=(values.get("LOG_LEVEL") or "INFO").upper(),
        )

    @classmethod
    def from_env(cls, env_file: str = DEFAULT_ENV_FILE) -> "Config":
        """Load configuration from ``env_file`` overlaid by the process environment.

        The env file itself is mandatory: a missing file is a fatal startup
        condition, matching how the relay is deployed.
        """
        if not os.path.isfile(env_file):
            raise ConfigError(f"Error loading {env_file} file: not found")
        try:
            values = dict(dotenv_values(env_file))
        except OSError as e:
            raise ConfigError(f"Error loading {env_file} file: {e}") from e
        # Real environment wins over the file
        for key in (*REQUIRED_KEYS, "MAX_FORM_BYTES", "MAX_CONCURRENT_UPLOADS", "HOST", "PORT", "LOG_LEVEL"):
            if key in os.environ:
                values[key] = os.environ[key]
        return cls.from_mapping(values)


def _int_value(values: Mapping[str, Optional[str]], key: str, default: Optional[int]) -> Optional[int]:
    raw = values.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from e
