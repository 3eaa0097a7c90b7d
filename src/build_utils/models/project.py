"""Project configuration model.

A :class:`Project` wraps package metadata (typically the contents of
``package.json``) together with its ``buildMetadata`` block and derives
everything the build/test/deploy task builders need: classification, feature
flags, deployment settings and the canonical directory layout. Instances are
immutable once constructed.
"""

from __future__ import annotations

import copy
import logging
import os
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from build_utils.errors import (
    InvalidLanguageError,
    InvalidProjectTypeError,
    MissingAwsConfigError,
    MissingAwsStacksError,
    MissingEnvironmentParamError,
    MissingPrivateNpmParamsError,
    UnknownStackKeyError,
)
from build_utils.models.build_metadata import (
    SUPPORTED_LANGUAGES,
    SUPPORTED_PROJECT_TYPES,
    BuildMetadata,
    Language,
    ProjectType,
    parse_build_metadata,
    parse_project_config,
)
from build_utils.models.directory import Directory, DirectoryShape, create_tree

logger = logging.getLogger(__name__)

ROOT_PATH = "./"

_SCOPE_PATTERN = re.compile(r"^@[^/]*/")
_WORD_SEPARATOR_PATTERN = re.compile(r"[-_.\s]+")
# "XMLParser" -> "xmlParser", "FooBar" -> "fooBar", "ABC" -> "abc"
_LEADING_CAPITALS_PATTERN = re.compile(r"^[A-Z]+(?=[A-Z][a-z])|^[A-Z]+")

_BASE_SHAPE: DirectoryShape = {
    "src": None,
    "test": {"unit": None, "api": None},
    "working": {
        "src": None,
        "test": {"unit": None, "api": None},
        "node_modules": None,
    },
    "dist": None,
    "docs": None,
    "node_modules": None,
    "coverage": None,
    ".gulp": None,
    ".tscache": None,
    "logs": None,
}


class Project:
    """Validated, read-only view of a project's build configuration."""

    def __init__(self, package_config: Any, build_metadata: Any = None) -> None:
        config = parse_project_config(package_config)
        metadata = config.build_metadata.merged_with(parse_build_metadata(build_metadata))

        self._name = config.name
        self._unscoped_name = _SCOPE_PATTERN.sub("", config.name)
        self._version = config.version
        self._description = config.description
        self._init_project_properties(metadata)
        self._root_dir = create_tree(ROOT_PATH, self._build_shape())

        logger.debug(
            "Initialized project %s (type=%s, language=%s)",
            self._name,
            self._project_type.value,
            self._language.value,
        )

    def __repr__(self) -> str:
        return (
            f"Project(name={self._name!r}, version={self._version!r}, "
            f"project_type={self._project_type.value!r}, language={self._language.value!r})"
        )

    def _init_project_properties(self, metadata: BuildMetadata) -> None:
        if metadata.project_type not in SUPPORTED_PROJECT_TYPES:
            msg = (
                "Invalid projectType (buildMetadata.projectType).\n"
                f"\tMust be one of: [{', '.join(SUPPORTED_PROJECT_TYPES)}]"
            )
            raise InvalidProjectTypeError(msg, value=metadata.project_type, allowed=SUPPORTED_PROJECT_TYPES)

        if metadata.language not in SUPPORTED_LANGUAGES:
            msg = (
                "Invalid language (buildMetadata.language).\n"
                f"\tMust be one of: [{', '.join(SUPPORTED_LANGUAGES)}]"
            )
            raise InvalidLanguageError(msg, value=metadata.language, allowed=SUPPORTED_LANGUAGES)

        self._project_type = ProjectType(metadata.project_type)
        self._language = Language(metadata.language)

        exported_types = metadata.exported_types
        self._has_exported_types = isinstance(exported_types, str) and len(exported_types) > 0
        self._exported_types: str | None = exported_types if self._has_exported_types else None

        self._has_typescript = self._language is Language.TS
        self._has_server = self._project_type is ProjectType.API
        self._has_docker = self._project_type is not ProjectType.LIB and metadata.docker is not None
        self._has_private_npm = metadata.private_npm is not None

        if self._project_type is ProjectType.AWS_MICROSERVICE:
            aws = metadata.aws
            if aws is None:
                msg = "The project is an AWS microservice, but does not define AWS configuration"
                raise MissingAwsConfigError(msg)
            if aws.stacks is None:
                msg = "The project is an AWS microservice, but does not define AWS stacks"
                raise MissingAwsStacksError(msg)
            self._aws_region = aws.region
            self._aws_profile = aws.profile
            cdk_stacks = dict(aws.stacks)
        else:
            self._aws_region = None
            self._aws_profile = None
            cdk_stacks = {}
        self._cdk_stacks: Mapping[str, str] = MappingProxyType(cdk_stacks)

        if self._has_docker and metadata.docker is not None:
            registry = metadata.docker.registry
            self._docker_repo: str | None = (
                f"{registry}/{self._unscoped_name}" if registry else self._unscoped_name
            )
        else:
            self._docker_repo = None

        if metadata.private_npm is not None:
            if metadata.private_npm.params is None:
                msg = "Project uses a private npm repository, but does not define any private npm params"
                raise MissingPrivateNpmParamsError(msg)
            self._private_npm_params: tuple[str, ...] = tuple(metadata.private_npm.params)
        else:
            self._private_npm_params = ()

    def _build_shape(self) -> dict[str, Any]:
        shape = copy.deepcopy(dict(_BASE_SHAPE))
        working = shape["working"]

        if self._project_type is ProjectType.AWS_MICROSERVICE:
            shape["infra"] = None
            working["infra"] = None
            shape["cdk.out"] = None

        if self._exported_types is not None:
            segments = [segment for segment in self._exported_types.split("/") if segment]
            _nest_segments(shape, segments)
            _nest_segments(working, segments)

        return shape

    @property
    def root_dir(self) -> Directory:
        return self._root_dir

    @property
    def js_root_dir(self) -> Directory:
        """Root of the javascript files; the transpiled output for typescript projects."""
        return self._root_dir.get_child("working") if self._has_typescript else self._root_dir

    @property
    def name(self) -> str:
        return self._name

    @property
    def unscoped_name(self) -> str:
        """Project name without its ``@scope/`` prefix."""
        return self._unscoped_name

    @property
    def version(self) -> Any:
        return self._version

    @property
    def description(self) -> Any:
        return self._description

    @property
    def config_file_name(self) -> str:
        """Name of the rc file expected for this project, e.g. ``.myProjectrc``."""
        return f".{_camelcase(self._unscoped_name)}rc"

    @property
    def project_type(self) -> ProjectType:
        return self._project_type

    @property
    def language(self) -> Language:
        return self._language

    @property
    def aws_region(self) -> str | None:
        return self._aws_region

    @property
    def aws_profile(self) -> str | None:
        return self._aws_profile

    @property
    def docker_repo(self) -> str | None:
        return self._docker_repo

    @property
    def exported_types(self) -> str | None:
        return self._exported_types

    @property
    def has_docker(self) -> bool:
        return self._has_docker

    @property
    def has_typescript(self) -> bool:
        return self._has_typescript

    @property
    def has_private_npm(self) -> bool:
        return self._has_private_npm

    @property
    def has_server(self) -> bool:
        """Whether the project hosts a server that needs API tests."""
        return self._has_server

    @property
    def has_exported_types(self) -> bool:
        return self._has_exported_types

    def get_private_npm_params(self) -> list[str]:
        """Return a copy of the environment variables required by the private npm registry."""
        return list(self._private_npm_params)

    def validate_private_npm_params(self) -> None:
        """Check that every private npm parameter is set in the environment.

        Intended to run right before packaging or publishing.
        """
        for param in self._private_npm_params:
            if not os.environ.get(param):
                logger.warning("Private npm parameter %s is not set for project %s", param, self._name)
                msg = f"Required npm parameter {param} not found in environment"
                raise MissingEnvironmentParamError(msg, param=param)

    def get_cdk_stacks(self) -> list[str]:
        """Return the configured CDK stack keys."""
        return list(self._cdk_stacks)

    def get_cdk_stack_name(self, key: str) -> str:
        if not isinstance(key, str) or not key:
            msg = "Invalid stack key (arg #1)"
            raise UnknownStackKeyError(msg, key=key)
        stack_name = self._cdk_stacks.get(key)
        if stack_name is None:
            msg = f"Unknown stack key: {key}"
            raise UnknownStackKeyError(msg, key=key)
        return stack_name


def _nest_segments(parent: dict[str, Any], segments: list[str]) -> None:
    last_index = len(segments) - 1
    for index, segment in enumerate(segments):
        if parent.get(segment) is None:
            parent[segment] = None if index == last_index else {}
        child = parent[segment]
        if child is None:
            return
        parent = child


def _camelcase(value: str) -> str:
    words = [word for word in _WORD_SEPARATOR_PATTERN.split(value) if word]
    if not words:
        return ""
    head, *tail = words
    head = _LEADING_CAPITALS_PATTERN.sub(lambda match: match.group().lower(), head)
    return head + "".join(
        word[0].upper() + (word[1:].lower() if word.isupper() else word[1:]) for word in tail
    )
