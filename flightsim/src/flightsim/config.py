from collections.abc import Mapping
from dataclasses import dataclass
import math
import os
from typing import Self, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Config:
    """
    Runtime settings, read from the environment by `from_env`:

        LISTEN_HOST     interface the websocket server binds to (default: all)
        LISTEN_PORT     websocket port (default: 9999)
        TICK_INTERVAL   seconds between simulation ticks (default: 1.0)
        FLEET_SIZE      number of flights to generate at startup (default: 500)
        ANALYSIS_DELAY  seconds the analysis service takes to answer (default: 1.5)
        SEED            seed for traffic generation and analysis; unset for a different fleet every run
    """

    listen_host: str = ""
    listen_port: int = 9999
    tick_interval: float = 1.0
    fleet_size: int = 500
    analysis_delay: float = 1.5
    seed: int | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> Self:
        defaults = cls()
        config = cls(
            listen_host=environ.get("LISTEN_HOST", defaults.listen_host),
            listen_port=_parse(environ, "LISTEN_PORT", int, defaults.listen_port),
            tick_interval=_parse(environ, "TICK_INTERVAL", float, defaults.tick_interval),
            fleet_size=_parse(environ, "FLEET_SIZE", int, defaults.fleet_size),
            analysis_delay=_parse(environ, "ANALYSIS_DELAY", float, defaults.analysis_delay),
            seed=_parse(environ, "SEED", int, None),
        )
        if not math.isfinite(config.tick_interval) or config.tick_interval <= 0:
            raise ValueError("TICK_INTERVAL must be a positive number")
        if config.fleet_size < 0:
            raise ValueError("FLEET_SIZE must not be negative")
        if not math.isfinite(config.analysis_delay) or config.analysis_delay < 0:
            raise ValueError("ANALYSIS_DELAY must not be negative")
        return config


def _parse(environ: Mapping[str, str], name: str, kind: type[T], default: T) -> T:
    try:
        raw = environ[name]
    except KeyError:
        return default
    try:
        return kind(raw)  # type: ignore
    except ValueError as exc:
        raise ValueError(f"{name}={raw!r} is not a valid {kind.__name__}") from exc
