from __future__ import annotations

import pytest

from build_utils.errors import InvalidConfigError
from build_utils.models.build_metadata import (
    SUPPORTED_LANGUAGES,
    SUPPORTED_PROJECT_TYPES,
    BuildMetadata,
    parse_build_metadata,
    parse_project_config,
)


def test_supported_values() -> None:
    assert SUPPORTED_PROJECT_TYPES == ["lib", "cli", "api", "aws-microservice"]
    assert SUPPORTED_LANGUAGES == ["js", "ts"]


def test_parse_project_config_reads_aliases_and_ignores_package_fields() -> None:
    config = parse_project_config(
        {
            "name": "@acme/widget",
            "version": "1.0.0",
            "dependencies": {"left-pad": "^1.0.0"},
            "buildMetadata": {
                "projectType": "cli",
                "language": "ts",
                "privateNpm": {"params": ["NPM_TOKEN"]},
                "exportedTypes": "src/types",
            },
        }
    )

    assert config.name == "@acme/widget"
    assert config.description is None
    assert config.build_metadata.project_type == "cli"
    assert config.build_metadata.private_npm is not None
    assert config.build_metadata.private_npm.params == ("NPM_TOKEN",)
    assert config.build_metadata.exported_types == "src/types"


def test_missing_or_null_build_metadata_defaults_to_empty() -> None:
    assert parse_project_config({"name": "demo"}).build_metadata == BuildMetadata()
    assert parse_project_config({"name": "demo", "buildMetadata": None}).build_metadata == BuildMetadata()


def test_non_object_options_are_treated_as_absent() -> None:
    metadata = BuildMetadata.model_validate(
        {
            "docker": True,
            "privateNpm": "yes",
            "aws": ["us-east-1"],
        }
    )

    assert metadata.docker is None
    assert metadata.private_npm is None
    assert metadata.aws is None


def test_non_list_params_and_non_mapping_stacks_are_absent() -> None:
    metadata = BuildMetadata.model_validate(
        {
            "privateNpm": {"params": "NPM_TOKEN"},
            "aws": {"region": "us-east-1", "stacks": "ApiStack"},
        }
    )

    assert metadata.private_npm is not None
    assert metadata.private_npm.params is None
    assert metadata.aws is not None
    assert metadata.aws.stacks is None


def test_merge_applies_only_fields_set_on_override() -> None:
    base = BuildMetadata.model_validate({"projectType": "api", "language": "js", "docker": {}})
    override = BuildMetadata.model_validate({"language": "ts", "docker": None})

    merged = base.merged_with(override)

    assert merged.project_type == "api"
    assert merged.language == "ts"
    assert merged.docker is None
    assert base.language == "js"
    assert base.docker is not None


def test_merge_with_none_returns_same_metadata() -> None:
    base = BuildMetadata.model_validate({"projectType": "lib"})
    assert base.merged_with(None) is base


@pytest.mark.parametrize("value", [None, "demo", 42, ["name"]])
def test_parse_project_config_rejects_non_mappings(value: object) -> None:
    with pytest.raises(InvalidConfigError, match="Invalid packageConfig"):
        parse_project_config(value)


def test_parse_project_config_requires_name() -> None:
    with pytest.raises(InvalidConfigError, match="Invalid packageConfig"):
        parse_project_config({"version": "1.0.0"})


def test_unknown_build_metadata_fields_are_rejected() -> None:
    with pytest.raises(InvalidConfigError, match="Invalid packageConfig"):
        parse_project_config({"name": "demo", "buildMetadata": {"projectTyp": "lib"}})
    with pytest.raises(InvalidConfigError, match="Invalid buildMetadata"):
        parse_build_metadata({"langauge": "ts"})


def test_parse_build_metadata_rejects_non_mappings() -> None:
    with pytest.raises(InvalidConfigError, match=r"Invalid buildMetadata \(arg #2\)"):
        parse_build_metadata("ts")
