"""Editor telemetry on top of telelog.

Buffers, search and the session log through four calls:

``configure(...)`` -- pick a preset or hand over a ready ``telelog.Config``
``get_logger(name)`` -- one cached logger per name
``record_event(name, ...)`` -- ``event::<name>`` lines with key/value data
``span(name, ...)`` -- profile a block, optionally under a component
"""

from __future__ import annotations

import os
from contextlib import ExitStack, contextmanager
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

tl = cast(Any, telelog)

ENV_PREFIX = "POUND_ENGINE_"
DEFAULT_LOGGER_NAME = os.getenv(f"{ENV_PREFIX}LOGGER", "pound_engine")

PRESETS = ("development", "production", "tui")

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _stringify(value: Any) -> str:
    return value if isinstance(value, str) else repr(value)


def _pairs(data: Dict[str, Any]) -> list[tuple[str, str]]:
    return [(str(key), _stringify(value)) for key, value in data.items()]


def _level(default: str = "INFO") -> str:
    return (_env("LOG_LEVEL") or default).upper()


def _log_file(config: Any, fallback: str = "") -> None:
    path = _env("LOG_FILE") or fallback
    if path:
        config.with_file_output(path)


def _build_preset_config(preset: str) -> Any:
    key = preset.lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown preset '{preset}'.")

    config = tl.Config()
    if key == "development":
        # Engine work outside the full-screen app: tests, scripts, the REPL.
        config.with_min_level(_level("DEBUG"))
        config.with_console_output(True)
        config.with_colored_output(not _env_flag("NO_COLOR", False))
        _log_file(config)
    elif key == "production":
        config.with_min_level(_level("WARNING"))
        config.with_console_output(False)
        config.with_buffering(True)
        _log_file(config, "pound.log")
    else:
        # The editor owns the terminal; log lines may only go to a file.
        config.with_min_level(_level())
        config.with_console_output(False)
        _log_file(config)

    config.with_profiling(True)
    return config


def _build_default_config() -> Any:
    config = tl.Config()
    config.with_min_level(_level())

    console = not _env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not _env_flag("NO_COLOR", False))
    if _env_flag("LOG_JSON", False):
        config.with_json_format(True)
    _log_file(config)

    if _env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(_env("LOG_BUFFER_SIZE") or "2048"))

    config.with_profiling(True)
    return config


def configure(*, config: Optional[Any] = None, preset: Optional[str] = None) -> None:
    """Replace the active telelog configuration.

    ``preset`` is one of ``PRESETS``; ``"tui"`` keeps the console silent so
    log output never lands on the editor screen. Without either argument the
    configuration is rebuilt from ``POUND_ENGINE_*`` environment variables.
    Loggers handed out earlier are dropped from the cache.
    """

    global _ACTIVE_CONFIG
    if config and preset:
        raise ValueError("Provide either `config` or `preset`, not both.")

    if preset:
        config = _build_preset_config(preset)
    elif config is None:
        config = _build_default_config()

    _ACTIVE_CONFIG = config
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or DEFAULT_LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            configure()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _level_method(logger: Any, level: Any) -> Tuple[Any, bool]:
    name = str(level).lower()
    with_data = getattr(logger, f"{name}_with", None)
    if with_data is not None:
        return with_data, True

    plain = getattr(logger, name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    return plain, False


def _emit(logger: Any, level: str, message: str, payload: Dict[str, Any]) -> None:
    method, accepts_data = _level_method(logger, level)
    if accepts_data:
        method(message, _pairs(payload))
    else:
        method(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _emit(
        get_logger(logger_name),
        level,
        f"event::{name}",
        {"event": name, **(data or {})},
    )


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[None]:
    """Profile the block as ``name``.

    ``component=True`` tracks the block under ``name``; a string picks the
    component id. ``metadata`` becomes logger context for the block only. An
    exception escaping the block is logged as ``span::fail`` and re-raised.
    """

    log = get_logger(logger_name)
    component_name = name if component is True else component or None
    context = {key: _stringify(value) for key, value in (metadata or {}).items()}
    for key, value in context.items():
        log.add_context(key, value)

    with ExitStack() as stack:
        if component_name:
            stack.enter_context(log.track_component(component_name))
        stack.enter_context(log.profile(name))
        try:
            yield
        except Exception as exc:
            payload: Dict[str, Any] = {"span": name, **context, "reason": str(exc)}
            if component_name:
                payload["component"] = component_name
            _emit(log, "error", "span::fail", payload)
            raise
        finally:
            for key in context:
                log.remove_context(key)


__all__ = [
    "PRESETS",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
