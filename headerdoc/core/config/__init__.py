"""
Configuration Management for headerdoc.

    from headerdoc.core.config import Config, load_config

    config = load_config()
    if config.render.include_private:
        ...

Layout
------
    config/
    ├── sections.py   # RenderConfig, ParserConfig, OutputConfig
    └── config.py     # Main Config class

Loading (YAML file, ${VAR} expansion, environment overrides, CLI overrides)
lives in headerdoc.core.config_loaders.
"""

from headerdoc.core.config.config import MAX_WORKERS, Config
from headerdoc.core.config.sections import OutputConfig, ParserConfig, RenderConfig
from headerdoc.core.config_loaders import apply_overrides, load_config

__all__ = [
    "Config",
    "MAX_WORKERS",
    "OutputConfig",
    "ParserConfig",
    "RenderConfig",
    "apply_overrides",
    "load_config",
]
