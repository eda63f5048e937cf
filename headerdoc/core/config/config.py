"""
Main configuration class for headerdoc.

Architecture Context
--------------------
Configuration sits at the Core layer. A Config object is created once per
run and handed to the pipeline, which passes the relevant section to each
component:

    headerdoc.yaml + HEADERDOC_* env + CLI flags
           ↓
    load_config() / apply_overrides() → Config
           ↓
    Pipeline → provider (parser), renderer (render), writer (output)

Configuration Hierarchy
-----------------------
    Config
    ├── RenderConfig   # include_private, build_toc
    ├── ParserConfig   # provider, clang_args, library_file, strip_directives
    ├── OutputConfig   # output_dir, trim_path_prefix
    ├── log_level
    └── jobs           # parallel units
"""

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

from headerdoc.core.config.sections import OutputConfig, ParserConfig, RenderConfig
from headerdoc.core.env import LOG_LEVELS, PROVIDERS
from headerdoc.core.exceptions import ConfigValidationError

# Upper bound on parallel units
MAX_WORKERS = 16


@dataclass
class Config:
    """Main headerdoc configuration."""

    render: RenderConfig = field(default_factory=RenderConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "INFO"
    jobs: int = 1

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.parser.provider not in PROVIDERS:
            raise ConfigValidationError(
                f"parser.provider must be one of {sorted(PROVIDERS)}, "
                f"got: {self.parser.provider}",
                field="parser.provider",
                value=self.parser.provider,
            )

        if not isinstance(self.jobs, int) or not 1 <= self.jobs <= MAX_WORKERS:
            raise ConfigValidationError(
                f"jobs must be between 1 and {MAX_WORKERS}, got: {self.jobs}",
                field="jobs",
                value=self.jobs,
            )

        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {sorted(LOG_LEVELS)}, got: {self.log_level}",
                field="log_level",
                value=self.log_level,
            )
        self.log_level = self.log_level.upper()

    @property
    def output_path(self) -> Path:
        """Directory rendered documents are written to."""
        return Path(self.output.output_dir) if self.output.output_dir else Path(".")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @staticmethod
    def _filter_fields(cls_type: Any, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Filter dict to only keys that match dataclass fields, handling None."""
        if not data:
            return {}
        valid_keys = {f.name for f in fields(cls_type)}
        return {k: v for k, v in data.items() if k in valid_keys}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        from headerdoc.core.config_loaders import expand_env_vars

        data = expand_env_vars(data or {})
        if not isinstance(data, dict):
            raise ConfigValidationError(
                "configuration root must be a mapping", value=type(data).__name__
            )

        return cls(
            render=RenderConfig(**cls._filter_fields(RenderConfig, data.get("render"))),
            parser=ParserConfig(**cls._filter_fields(ParserConfig, data.get("parser"))),
            output=OutputConfig(**cls._filter_fields(OutputConfig, data.get("output"))),
            log_level=str(data.get("log_level", "INFO")),
            jobs=data.get("jobs", 1),
        )
