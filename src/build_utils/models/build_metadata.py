"""Configuration models for package and build metadata."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from build_utils.errors import InvalidConfigError


class ProjectType(str, Enum):
    """Project archetypes that drive layout and task selection."""

    LIB = "lib"
    CLI = "cli"
    API = "api"
    AWS_MICROSERVICE = "aws-microservice"


class Language(str, Enum):
    """Source languages supported by the build toolchain."""

    JS = "js"
    TS = "ts"


SUPPORTED_PROJECT_TYPES = [member.value for member in ProjectType]
SUPPORTED_LANGUAGES = [member.value for member in Language]


def _mapping_or_none(value: Any) -> Any:
    if isinstance(value, Mapping | BaseModel):
        return value
    return None


class DockerConfig(BaseModel):
    """Docker packaging options."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    registry: str | None = None


class PrivateNpmConfig(BaseModel):
    """Private npm registry options."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    params: tuple[str, ...] | None = None

    @field_validator("params", mode="before")
    @classmethod
    def _params_must_be_list(cls, value: Any) -> Any:
        return value if isinstance(value, list | tuple) else None


class AwsConfig(BaseModel):
    """Cloud deployment descriptor for AWS microservices."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    region: str | None = None
    profile: str | None = None
    stacks: dict[str, str] | None = None

    @field_validator("stacks", mode="before")
    @classmethod
    def _stacks_must_be_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, Mapping) else None


class BuildMetadata(BaseModel):
    """Build metadata block (``buildMetadata`` in package.json).

    ``projectType``, ``language`` and ``exportedTypes`` are kept as supplied
    and validated by :class:`build_utils.models.project.Project`, so that an
    unsupported value is reported with a precise error instead of a generic
    validation failure. Object-valued options that are not objects are
    treated as absent.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    project_type: Any = Field(default=None, alias="projectType")
    language: Any = None
    docker: DockerConfig | None = None
    private_npm: PrivateNpmConfig | None = Field(default=None, alias="privateNpm")
    aws: AwsConfig | None = None
    exported_types: Any = Field(default=None, alias="exportedTypes")

    @field_validator("docker", "private_npm", "aws", mode="before")
    @classmethod
    def _objects_only(cls, value: Any) -> Any:
        return _mapping_or_none(value)

    def merged_with(self, override: BuildMetadata | None) -> BuildMetadata:
        """Return a copy with every field explicitly set on ``override`` applied."""
        if override is None:
            return self
        updates = {name: getattr(override, name) for name in override.model_fields_set}
        return self.model_copy(update=updates)


class ProjectConfig(BaseModel):
    """Package identity plus build metadata; other package.json keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str
    # Copied verbatim; package.json tooling does not always write strings here.
    version: Any = None
    description: Any = None
    build_metadata: BuildMetadata = Field(default_factory=BuildMetadata, alias="buildMetadata")

    @field_validator("build_metadata", mode="before")
    @classmethod
    def _default_metadata(cls, value: Any) -> Any:
        return {} if value is None else value


def parse_project_config(package_config: Any) -> ProjectConfig:
    if isinstance(package_config, ProjectConfig):
        return package_config
    if not isinstance(package_config, Mapping):
        msg = "Invalid packageConfig (arg #1)"
        raise InvalidConfigError(msg)
    try:
        return ProjectConfig.model_validate(dict(package_config))
    except ValidationError as exc:
        msg = f"Invalid packageConfig (arg #1): {exc}"
        raise InvalidConfigError(msg) from exc


def parse_build_metadata(build_metadata: Any) -> BuildMetadata | None:
    if build_metadata is None or isinstance(build_metadata, BuildMetadata):
        return build_metadata
    if not isinstance(build_metadata, Mapping):
        msg = "Invalid buildMetadata (arg #2)"
        raise InvalidConfigError(msg)
    try:
        return BuildMetadata.model_validate(dict(build_metadata))
    except ValidationError as exc:
        msg = f"Invalid buildMetadata (arg #2): {exc}"
        raise InvalidConfigError(msg) from exc
