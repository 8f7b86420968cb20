"""Runtime configuration for tablerender.

Defaults live in YAML profiles under ``tablerender/configs/`` and are loaded
with Hydra's Compose API. The profile is selected by
``TABLERENDER_CONFIG_NAME`` (default: ``"default"``); Hydra overrides
(``key=value``) customize individual values.

Usage::

    from tablerender.config import get_config, load_config

    cfg = get_config()                                   # cached, env-selected
    cfg = load_config("default", ["default_page_size=25"])
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

_CONFIG_DIR = str(Path(__file__).parent / "configs")

DEFAULT_CONFIG_NAME = "default"
DEFAULT_STYLESHEET_URL = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css"


@dataclass(frozen=True)
class RendererConfig:
    """Process-wide rendering defaults."""

    page_param: str = "page"
    page_size_param: str = "page_size"
    sort_param: str = "sort_by"
    order_param: str = "sort_order"
    search_param: str = "search"
    default_page_size: int = 10
    max_page_size: int = 200
    page_size_options: tuple[int, ...] = (10, 25, 50, 100)
    page_window: int = 5
    search_placeholder: str = "Search all columns..."
    page_title: str = "Table"
    stylesheet_url: str = DEFAULT_STYLESHEET_URL


# ---------------------------------------------------------------------------
# YAML loading via Hydra Compose API
# ---------------------------------------------------------------------------

def _load_yaml_config(
    config_name: str,
    overrides: list[str] | None = None,
    config_dir: str | None = None,
) -> dict[str, object]:
    """Load a YAML profile via Hydra Compose API.

    Returns an empty dict if Hydra is unavailable or the profile is missing.

    Raises:
        hydra.errors.ConfigCompositionException: an override does not apply
            to the profile.
    """
    try:
        from hydra import compose, initialize_config_dir
        from hydra.errors import MissingConfigException
        from omegaconf import OmegaConf
    except ImportError:
        logger.debug("Hydra is not installed, using built-in defaults")
        return {}

    abs_dir = os.path.abspath(config_dir or _CONFIG_DIR)
    try:
        with initialize_config_dir(version_base=None, config_dir=abs_dir):
            cfg = compose(config_name=config_name, overrides=overrides or [])
    except MissingConfigException:
        logger.debug("YAML config %r not found in %s, falling back to defaults", config_name, abs_dir)
        return {}
    container = OmegaConf.to_container(cfg, resolve=True)
    if isinstance(container, dict):
        return container  # type: ignore[return-value]
    return {}


# ---------------------------------------------------------------------------
# YAML value helpers
# ---------------------------------------------------------------------------

def _yaml_str(yaml: dict[str, object], key: str, default: str = "") -> str:
    val = yaml.get(key)
    return str(val) if val is not None else default


def _yaml_int(yaml: dict[str, object], key: str, default: int = 0) -> int:
    val = yaml.get(key)
    if val is None:
        return default
    try:
        return int(str(val))
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r", key, val)
        return default


def _yaml_int_tuple(
    yaml: dict[str, object], key: str, default: tuple[int, ...] = (),
) -> tuple[int, ...]:
    val = yaml.get(key)
    if val is None:
        return default
    items = val if isinstance(val, (list, tuple)) else str(val).split(",")
    sizes: list[int] = []
    for item in items:
        text = str(item).strip()
        if text.isdigit() and int(text) > 0:
            sizes.append(int(text))
    return tuple(sizes) or default


def build_config(yaml: dict[str, object]) -> RendererConfig:
    """Build a :class:`RendererConfig` from loaded YAML values."""
    base = RendererConfig()
    page_window = _yaml_int(yaml, "page_window", base.page_window)
    if page_window < 1:
        logger.warning("Ignoring page_window=%d, need at least 1", page_window)
        page_window = base.page_window
    return RendererConfig(
        page_param=_yaml_str(yaml, "page_param", base.page_param),
        page_size_param=_yaml_str(yaml, "page_size_param", base.page_size_param),
        sort_param=_yaml_str(yaml, "sort_param", base.sort_param),
        order_param=_yaml_str(yaml, "order_param", base.order_param),
        search_param=_yaml_str(yaml, "search_param", base.search_param),
        default_page_size=_yaml_int(yaml, "default_page_size", base.default_page_size),
        max_page_size=_yaml_int(yaml, "max_page_size", base.max_page_size),
        page_size_options=_yaml_int_tuple(yaml, "page_size_options", base.page_size_options),
        page_window=page_window,
        search_placeholder=_yaml_str(yaml, "search_placeholder", base.search_placeholder),
        page_title=_yaml_str(yaml, "page_title", base.page_title),
        stylesheet_url=_yaml_str(yaml, "stylesheet_url", base.stylesheet_url),
    )


def load_config(
    config_name: str = DEFAULT_CONFIG_NAME,
    overrides: list[str] | None = None,
    config_dir: str | None = None,
) -> RendererConfig:
    """Compose a profile with optional Hydra overrides (uncached).

    A missing profile yields the built-in defaults; an override that does
    not apply raises instead of discarding the profile.
    """
    return build_config(_load_yaml_config(config_name, overrides, config_dir))


@lru_cache(maxsize=1)
def get_config() -> RendererConfig:
    """Return the config selected by ``TABLERENDER_CONFIG_NAME``.

    The result is cached; call ``get_config.cache_clear()`` to re-read
    (useful in tests).
    """
    config_name = os.environ.get("TABLERENDER_CONFIG_NAME", DEFAULT_CONFIG_NAME).strip().lower()
    return load_config(config_name or DEFAULT_CONFIG_NAME)
