"""Base class for builders that describe build tasks for a project."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from build_utils.models.project import Project

logger = logging.getLogger(__name__)

type TaskPayloadValue = str | list[str] | dict[str, str]
type TaskPayload = dict[str, TaskPayloadValue]

WATCH_DIRS = ("src", "test", "infra")
WATCH_EXTENSIONS = ("md", "html", "json", "js", "jsx", "ts", "tsx")


@dataclass(frozen=True, slots=True)
class BuildTask:
    """Description of a build task; the runner decides how to execute it."""

    name: str
    description: str
    sources: tuple[str, ...] = ()
    targets: tuple[str, ...] = ()
    command: tuple[str, ...] = ()
    options: dict[str, str] = field(default_factory=dict)
    environment: dict[str, str] = field(default_factory=dict)

    def as_payload(self) -> TaskPayload:
        """Return a transport-friendly task payload."""
        payload: TaskPayload = {
            "name": self.name,
            "description": self.description,
            "sources": list(self.sources),
            "targets": list(self.targets),
            "command": list(self.command),
        }
        if self.options:
            payload["options"] = dict(self.options)
        if self.environment:
            payload["environment"] = dict(self.environment)
        return payload


class TaskBuilder:
    """Build a named task for a project.

    Subclasses implement ``_create_task``; ``build_task`` validates the
    project and fills in the builder's name and description.
    """

    def __init__(self, name: str, description: str) -> None:
        if not isinstance(name, str) or not name:
            msg = "Invalid name (arg #1)"
            raise ValueError(msg)
        if not isinstance(description, str) or not description:
            msg = "Invalid description (arg #2)"
            raise ValueError(msg)
        self._name = name
        self._description = description

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    def build_task(self, project: Project) -> BuildTask:
        require_project(project)
        task = self._create_task(project)
        logger.debug("Built task %s for project %s", task.name, project.name)
        return task

    def get_watch_paths(self, project: Project) -> list[str]:
        """Return globs that should retrigger this task when they change."""
        require_project(project)
        root = project.root_dir
        return [
            root.get_child(dir_name).get_all_files_glob(extension)
            for dir_name in WATCH_DIRS
            if dir_name in root.children
            for extension in WATCH_EXTENSIONS
        ]

    def _create_task(self, project: Project) -> BuildTask:
        msg = f"{type(self).__name__} does not implement _create_task()"
        raise NotImplementedError(msg)

    def _task(
        self,
        *,
        sources: list[str] | None = None,
        targets: list[str] | None = None,
        command: list[str] | None = None,
        options: dict[str, str] | None = None,
        environment: dict[str, str] | None = None,
    ) -> BuildTask:
        return BuildTask(
            name=self._name,
            description=self._description,
            sources=tuple(sources or ()),
            targets=tuple(targets or ()),
            command=tuple(command or ()),
            options=dict(options or {}),
            environment=dict(environment or {}),
        )


def require_project(project: object) -> None:
    if not isinstance(project, Project):
        msg = "Invalid project (arg #1)"
        raise TypeError(msg)
