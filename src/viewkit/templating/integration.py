"""Kida environment setup.

Creates a kida Environment from AppConfig, or from a plain list of
template directories, and registers viewkit's built-in filters.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader

from viewkit.config import AppConfig
from viewkit.templating.filters import BUILTIN_FILTERS


def create_environment(
    config: AppConfig,
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment from app configuration.

    ``config.template_dir`` is searched first, then each of
    ``config.component_dirs`` in order, so application templates can
    override shared ones by name.
    """
    loaders = [FileSystemLoader(str(config.template_dir))]
    loaders.extend(FileSystemLoader(str(d)) for d in config.component_dirs)

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    env.update_filters(BUILTIN_FILTERS)
    # User filters may override built-ins
    if filters:
        env.update_filters(filters)
    for name, value in (globals_ or {}).items():
        env.add_global(name, value)
    return env


def setup_templates(
    *paths: str | Path,
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
) -> Environment:
    """Create an environment searching *paths* in order.

    Put the application's own directory first so its templates override
    library ones::

        templates = setup_templates("web/templates", "vendor/templates")
    """
    if not paths:
        msg = "setup_templates() needs at least one template directory."
        raise ValueError(msg)
    config = AppConfig(template_dir=paths[0], component_dirs=tuple(paths[1:]))
    return create_environment(config, filters, globals_)
