"""Error taxonomy for project configuration and layout lookups."""

from __future__ import annotations


class BuildConfigError(ValueError):
    """Base class for malformed project configuration."""


class InvalidConfigError(BuildConfigError):
    """Raised when the package configuration is not a usable structure."""


class InvalidProjectTypeError(BuildConfigError):
    """Raised when buildMetadata.projectType is not supported."""

    def __init__(self, message: str, *, value: object, allowed: list[str]) -> None:
        super().__init__(message)
        self.value = value
        self.allowed = list(allowed)


class InvalidLanguageError(BuildConfigError):
    """Raised when buildMetadata.language is not supported."""

    def __init__(self, message: str, *, value: object, allowed: list[str]) -> None:
        super().__init__(message)
        self.value = value
        self.allowed = list(allowed)


class MissingAwsConfigError(BuildConfigError):
    """Raised when an AWS microservice has no aws configuration."""


class MissingAwsStacksError(BuildConfigError):
    """Raised when an AWS microservice has no stack mapping."""


class MissingPrivateNpmParamsError(BuildConfigError):
    """Raised when privateNpm is configured without a params list."""


class InvalidShapeError(TypeError):
    """Raised when a directory shape is not a mapping of names to shapes."""


class UnknownChildError(LookupError):
    """Raised when a directory has no child with the requested name."""

    def __init__(self, message: str, *, name: object) -> None:
        super().__init__(message)
        self.name = name


class UnknownStackKeyError(LookupError):
    """Raised when a cdk stack key is invalid or not configured."""

    def __init__(self, message: str, *, key: object) -> None:
        super().__init__(message)
        self.key = key


class MissingEnvironmentParamError(RuntimeError):
    """Raised when a required private npm parameter is not in the environment."""

    def __init__(self, message: str, *, param: str) -> None:
        super().__init__(message)
        self.param = param
