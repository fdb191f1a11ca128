"""Process-wide configuration held in a ``ContextVar``.

The default is loaded once from ``APP_CONFIG_FILE`` (``config.yaml`` when
unset). Tests and callers narrow it per task with ``with_context``.
"""

import os
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path

from src.identity.runtime.config.config_data import ConfigData
from src.identity.runtime.config.config_template import load_templated_yaml

_config: ContextVar[ConfigData] = ContextVar(
    "identity_config",
    default=load_templated_yaml(Path(os.getenv("APP_CONFIG_FILE", "config.yaml"))),
)


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _apply_override(base: ConfigData, override: ConfigData) -> ConfigData:
    """Overlay the fields explicitly set on ``override`` onto ``base``."""
    merged = _deep_merge(base.model_dump(), override.model_dump(exclude_unset=True))
    return ConfigData.model_validate(merged)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the current configuration.

    Only the fields explicitly set on ``config_override`` replace the current
    values; everything else is inherited from the enclosing context.

    Example:
        override = ConfigData(identity=IdentityConfig(allowed_providers=["google"]))
        with with_context(override):
            get_config().identity.allowed_providers  # ["google"]
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    token = _config.set(_apply_override(_config.get(), config_override))
    try:
        yield
    finally:
        _config.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration."""
    _config.set(config)


def get_config() -> ConfigData:
    return _config.get()
