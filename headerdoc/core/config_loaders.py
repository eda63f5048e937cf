"""
Configuration Loading and Management Functions.

Handles loading headerdoc.yaml, environment variable overrides and CLI
overrides.

Configuration precedence: 1. CLI flags, 2. Env vars, 3. YAML file, 4. Defaults

Environment Variables
---------------------
    HEADERDOC_INCLUDE_PRIVATE   true/false
    HEADERDOC_BUILD_TOC         true/false
    HEADERDOC_PROVIDER          clang | tree-sitter
    HEADERDOC_OUTPUT_DIR        directory for rendered documents
    HEADERDOC_LIBCLANG          path to libclang shared library
    HEADERDOC_LOG_LEVEL         DEBUG | INFO | WARNING | ERROR | CRITICAL
    HEADERDOC_JOBS              parallel units (1-16)

String values in the YAML file may reference the environment with
``${VAR_NAME}`` or ``${VAR_NAME:default}``.
"""

import os
import re
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional

import yaml

from headerdoc.core.env import (
    LOG_LEVELS,
    PROVIDERS,
    get_env_bool,
    get_env_int,
    get_env_str,
    get_env_whitelist,
)
from headerdoc.core.exceptions import ConfigValidationError
from headerdoc.core.logging import get_logger

if TYPE_CHECKING:
    from headerdoc.core.config import Config

logger = get_logger(__name__)

CONFIG_FILENAMES = ("headerdoc.yaml", ".headerdoc.yaml")


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Handles strings with ${VAR_NAME} or ${VAR_NAME:default} syntax inside
    nested dictionaries and lists.

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with all environment variables expanded
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

        def replace_env_var(match: re.Match) -> str:
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def _apply_env_overrides(config: "Config") -> "Config":
    """
    Apply environment variable overrides to configuration.

    Environment variables take precedence over config file values.
    """
    include_private = get_env_bool("HEADERDOC_INCLUDE_PRIVATE")
    build_toc = get_env_bool("HEADERDOC_BUILD_TOC")
    provider = get_env_whitelist("HEADERDOC_PROVIDER", PROVIDERS)
    log_level = get_env_whitelist("HEADERDOC_LOG_LEVEL", LOG_LEVELS)

    from headerdoc.core.config import MAX_WORKERS

    return apply_overrides(
        config,
        include_private=include_private,
        build_toc=build_toc,
        provider=provider,
        library_file=get_env_str("HEADERDOC_LIBCLANG"),
        output_dir=get_env_str("HEADERDOC_OUTPUT_DIR"),
        log_level=log_level,
        jobs=get_env_int("HEADERDOC_JOBS", min_value=1, max_value=MAX_WORKERS),
    )


def apply_overrides(
    config: "Config",
    *,
    include_private: Optional[bool] = None,
    build_toc: Optional[bool] = None,
    provider: Optional[str] = None,
    clang_args: Optional[List[str]] = None,
    library_file: Optional[str] = None,
    output_dir: Optional[str] = None,
    trim_path_prefix: Optional[str] = None,
    log_level: Optional[str] = None,
    jobs: Optional[int] = None,
) -> "Config":
    """
    Return a copy of ``config`` with every non-None override applied.

    ``clang_args`` are appended to the configured arguments rather than
    replacing them. Validation runs again on the new Config.
    """
    render = config.render
    if include_private is not None:
        render = replace(render, include_private=include_private)
    if build_toc is not None:
        render = replace(render, build_toc=build_toc)

    parser = config.parser
    if provider is not None:
        parser = replace(parser, provider=provider)
    if clang_args:
        parser = replace(parser, clang_args=[*parser.clang_args, *clang_args])
    if library_file is not None:
        parser = replace(parser, library_file=library_file)

    output = config.output
    if output_dir is not None:
        output = replace(output, output_dir=output_dir)
    if trim_path_prefix is not None:
        output = replace(output, trim_path_prefix=trim_path_prefix)

    return replace(
        config,
        render=render,
        parser=parser,
        output=output,
        log_level=log_level if log_level is not None else config.log_level,
        jobs=jobs if jobs is not None else config.jobs,
    )


def find_config_file(base_path: Path) -> Optional[Path]:
    """Return the first headerdoc config file found in ``base_path``."""
    for filename in CONFIG_FILENAMES:
        candidate = base_path / filename
        if candidate.is_file():
            return candidate
    return None


def load_config(
    config_path: Optional[Path] = None, base_path: Optional[Path] = None
) -> "Config":
    """
    Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Explicit config file. Must exist when given.
        base_path: Directory searched for headerdoc.yaml when no explicit
            file is given. Defaults to current directory.

    Returns:
        Config object with all settings.

    Raises:
        ConfigValidationError: If the explicit file is missing, the YAML is
            malformed, or a value fails validation.
    """
    from headerdoc.core.config import Config

    if config_path is None:
        config_path = find_config_file(base_path or Path.cwd())
        if config_path is None:
            return _apply_env_overrides(Config())
    elif not config_path.is_file():
        raise ConfigValidationError(
            f"Config file not found: {config_path}",
            field="config_path",
            value=str(config_path),
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigValidationError(
            f"Could not parse {config_path}: {e}", field="config_path"
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigValidationError(
            f"Could not read {config_path}: {e}", field="config_path"
        ) from e

    logger.debug("Loaded configuration", path=str(config_path))
    return _apply_env_overrides(Config.from_dict(data))
