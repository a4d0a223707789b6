"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, no string-key
dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    Override what you need::

        config = AppConfig(template_dir="web/templates", debug=True)
    """

    debug: bool = False

    # Templates
    template_dir: str | Path = "templates"
    component_dirs: tuple[str | Path, ...] = ()  # Searched after template_dir, in order
    template_suffix: str = ".html"  # Appended to the file part of a template spec
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True
