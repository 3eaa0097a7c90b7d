import os

import pytest
from hypothesis import given
from hypothesis import strategies as st

from build_utils.errors import InvalidLanguageError, InvalidProjectTypeError, UnknownStackKeyError
from build_utils.models.build_metadata import SUPPORTED_LANGUAGES, SUPPORTED_PROJECT_TYPES
from build_utils.models.directory import create_tree
from build_utils.models.project import Project

_names = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-_.", min_size=1, max_size=20)
_keys = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=1, max_size=8)


def _config(name: str = "demo", **build_metadata: object) -> dict[str, object]:
    metadata: dict[str, object] = {"projectType": "lib", "language": "js"}
    metadata.update(build_metadata)
    return {"name": name, "version": "0.1.0", "buildMetadata": metadata}


@given(_names, st.one_of(st.none(), _names))
def test_unscoped_name_strips_scope(name: str, scope: str | None) -> None:
    full_name = f"@{scope}/{name}" if scope is not None else name
    assert Project(_config(full_name)).unscoped_name == name


@given(st.text().filter(lambda value: value not in SUPPORTED_PROJECT_TYPES))
def test_unsupported_project_types_fail(project_type: str) -> None:
    with pytest.raises(InvalidProjectTypeError):
        Project(_config(projectType=project_type))


@given(st.text().filter(lambda value: value not in SUPPORTED_LANGUAGES))
def test_unsupported_languages_fail(language: str) -> None:
    with pytest.raises(InvalidLanguageError):
        Project(_config(language=language))


@given(st.sampled_from(SUPPORTED_LANGUAGES), st.one_of(st.none(), _names))
def test_libraries_never_have_docker(language: str, registry: str | None) -> None:
    docker = {"registry": registry} if registry is not None else {}
    project = Project(_config(language=language, docker=docker))
    assert project.has_docker is False
    assert project.docker_repo is None


@given(st.sampled_from(["cli", "api", "aws-microservice"]), st.one_of(st.none(), _names), _names)
def test_docker_repo_uses_registry(project_type: str, registry: str | None, name: str) -> None:
    docker = {"registry": registry} if registry is not None else {}
    project = Project(
        _config(name, projectType=project_type, docker=docker, aws={"stacks": {"main": "MainStack"}})
    )
    assert project.docker_repo == (f"{registry}/{name}" if registry else name)


@given(st.dictionaries(_keys, _names, min_size=1, max_size=5), st.one_of(st.integers(), _keys))
def test_cdk_stack_lookup(stacks: dict[str, str], other_key: object) -> None:
    project = Project(_config(projectType="aws-microservice", aws={"stacks": stacks}))

    assert project.get_cdk_stacks() == list(stacks)
    for key in project.get_cdk_stacks():
        assert project.get_cdk_stack_name(key) == stacks[key]
    if other_key not in stacks:
        with pytest.raises(UnknownStackKeyError):
            project.get_cdk_stack_name(other_key)  # type: ignore[arg-type]


@given(st.lists(_keys, min_size=1, max_size=5))
def test_nested_shape_paths(segments: list[str]) -> None:
    shape: dict[str, object] | None = None
    for segment in reversed(segments):
        shape = {segment: shape}
    root = create_tree("./", shape)  # type: ignore[arg-type]

    node = root
    for segment in segments:
        node = node.get_child(segment)
    assert node.path == os.path.join("./", *segments)
