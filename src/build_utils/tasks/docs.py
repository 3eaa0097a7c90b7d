"""Documentation task generated from code comments."""

from __future__ import annotations

import os

from build_utils.models.build_metadata import Language
from build_utils.models.project import Project
from build_utils.tasks.task_builder import BuildTask, TaskBuilder

_DESCRIPTIONS = {
    Language.JS: "Generates documentation from code comments in javascript files",
    Language.TS: "Generates documentation from code comments in typescript files",
}

# jsdoc needs an explicit template; typedoc ships its own.
_JS_TEMPLATE = os.path.join("node_modules", "docdash")


class DocsTaskBuilder(TaskBuilder):
    def __init__(self, language: Language = Language.JS) -> None:
        self._language = Language(language)
        super().__init__(f"docs-{self._language.value}", _DESCRIPTIONS[self._language])

    @property
    def language(self) -> Language:
        return self._language

    def _create_task(self, project: Project) -> BuildTask:
        root = project.root_dir
        docs_dir = root.get_child("docs")
        version_segments = [str(project.version)] if project.version is not None and project.version != "" else []

        options = {
            "readme": root.get_file_path("README.md"),
            "destination": docs_dir.get_file_path(os.path.join(project.name, *version_segments)),
        }
        if self._language is Language.JS:
            options["template"] = _JS_TEMPLATE

        sources = [root.get_child("src").get_all_files_glob(self._language.value)]
        return self._task(sources=sources, targets=[options["destination"]], options=options)
