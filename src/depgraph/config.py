"""Configuration management for depgraph using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import ConfigurationError
from .graph.policy import (
    DEFAULT_OUTPUT_FORMATS,
    Generator,
    GeneratorRegistry,
    IncludeKinds,
    ModuleColors,
    ProjectGenerator,
    all_kinds,
)
from .models.coordinates import RelationKind
from .render import OutputFormat

CONFIG_FILE_NAME = ".depgraph.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


def _default_formats() -> list[OutputFormat]:
    return [OutputFormat(format) for format in DEFAULT_OUTPUT_FORMATS]


def _check_unique_names(generators: list) -> list:
    seen = set()
    for generator in generators:
        if generator.name in seen:
            raise ValueError(f"generator name '{generator.name}' is used more than once")
        seen.add(generator.name)
    return generators


class GeneratorConfig(BaseModel):
    """Module graph generator section."""
    name: str
    include: list[RelationKind] | None = None  # None traverses every relation kind
    include_version: bool = Field(alias="includeVersion", default=False)
    output_formats: list[OutputFormat] = Field(alias="outputFormats", default_factory=_default_formats)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("generator name must not be empty")
        return v

    def to_generator(self) -> Generator:
        return Generator(
            name=self.name,
            include=IncludeKinds(frozenset(self.include)) if self.include is not None else all_kinds,
            include_version=self.include_version,
            output_formats=tuple(format.value for format in self.output_formats),
        )


class ProjectGeneratorConfig(BaseModel):
    """Project graph generator section."""
    name: str
    include: list[RelationKind] | None = None
    include_external_dependencies: bool = Field(alias="includeExternalDependencies", default=False)
    default_color: str | None = Field(alias="defaultColor", default=None)
    colors: dict[str, str] = Field(default_factory=dict)  # module path -> fill colour
    output_formats: list[OutputFormat] = Field(alias="outputFormats", default_factory=_default_formats)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("generator name must not be empty")
        return v

    def to_generator(self) -> ProjectGenerator:
        return ProjectGenerator(
            name=self.name,
            include=IncludeKinds(frozenset(self.include)) if self.include is not None else all_kinds,
            include_external_dependencies=self.include_external_dependencies,
            color=ModuleColors(overrides=dict(self.colors), default=self.default_color),
            output_formats=tuple(format.value for format in self.output_formats),
        )


class OutputConfig(BaseModel):
    """Output configuration section."""
    dir: str = "build/reports"


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = Field(default=LogLevel.INFO, validate_default=True)

    model_config = ConfigDict(use_enum_values=True)


class DepgraphConfig(BaseModel):
    """Complete depgraph configuration model."""
    generators: list[GeneratorConfig] = Field(
        default_factory=lambda: [GeneratorConfig(name="ALL")]
    )
    project_generators: list[ProjectGeneratorConfig] = Field(
        alias="projectGenerators",
        default_factory=lambda: [ProjectGeneratorConfig(name="ALL")],
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @field_validator("generators", "project_generators")
    @classmethod
    def validate_unique_names(cls, v):
        return _check_unique_names(v)

    def generator_registry(self) -> GeneratorRegistry[Generator]:
        return GeneratorRegistry(generator.to_generator() for generator in self.generators)

    def project_generator_registry(self) -> GeneratorRegistry[ProjectGenerator]:
        return GeneratorRegistry(generator.to_generator() for generator in self.project_generators)


def load_config(config_path: str | Path | None = None) -> DepgraphConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .depgraph.json

    Returns:
        DepgraphConfig: Loaded and validated configuration

    Raises:
        ConfigurationError: If the configuration file is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return DepgraphConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ConfigurationError(f"Failed to load config from {config_path}: {e}")
    else:
        return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .depgraph.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> DepgraphConfig:
    """Default configuration: one ALL generator of each kind."""
    return DepgraphConfig()
