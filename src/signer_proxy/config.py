import logging
import math
import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_PORT = 9000
DEFAULT_HEALTH_TIMEOUT_S = 2.0
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def env(k: str, d: str = "") -> str:
    return os.getenv(k, d).strip()


def _float_or_none(name: str, raw: str) -> Optional[float]:
    if not raw:
        return None
    try:
        v = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    if not 0 < v < math.inf:
        raise ConfigError(f"{name} must be a positive finite number, got {raw!r}")
    return v


@dataclass(frozen=True)
class Config:
    upstream_url: str
    port: int = DEFAULT_PORT
    # None leaves the signing call to the transport default
    sign_timeout: Optional[float] = None
    health_timeout: float = DEFAULT_HEALTH_TIMEOUT_S
    log_level: str = "INFO"

    @property
    def upcheck_url(self) -> str:
        return self.upstream_url.rstrip("/") + "/upcheck"

    @classmethod
    def from_env(cls) -> "Config":
        upstream_url = env("WEB3SIGNER_URL")
        if not upstream_url:
            raise ConfigError("WEB3SIGNER_URL environment variable is not set")

        port_raw = env("PORT")
        if not port_raw:
            log.info("PORT environment variable not set, defaulting to %d", DEFAULT_PORT)
            port = DEFAULT_PORT
        else:
            try:
                port = int(port_raw)
            except ValueError:
                raise ConfigError(f"PORT must be an integer, got {port_raw!r}")
            if not 1 <= port <= 65535:
                raise ConfigError(f"PORT must be between 1 and 65535, got {port}")

        health_timeout = _float_or_none("HEALTH_TIMEOUT_S", env("HEALTH_TIMEOUT_S"))
        log_level = env("LOG_LEVEL", "INFO").upper() or "INFO"
        if log_level not in LOG_LEVELS:
            raise ConfigError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")
        return cls(
            upstream_url=upstream_url,
            port=port,
            sign_timeout=_float_or_none("SIGN_TIMEOUT_S", env("SIGN_TIMEOUT_S")),
            health_timeout=DEFAULT_HEALTH_TIMEOUT_S if health_timeout is None else health_timeout,
            log_level=log_level,
        )
