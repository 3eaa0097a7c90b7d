"""Clean task: removes working, distribution and temporary files."""

from __future__ import annotations

from build_utils.models.project import Project
from build_utils.tasks.task_builder import BuildTask, TaskBuilder

CLEAN_DIRS = ("coverage", "dist", "working", ".tscache", "cdk.out")


class CleanTaskBuilder(TaskBuilder):
    def __init__(self) -> None:
        super().__init__(
            "clean",
            "Cleans out working, distribution and temporary files and directories",
        )

    def _create_task(self, project: Project) -> BuildTask:
        root = project.root_dir
        targets = [root.get_child(name).glob_path for name in CLEAN_DIRS if name in root.children]
        return self._task(targets=targets)
