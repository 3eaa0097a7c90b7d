"""Select the task builders that apply to a project."""

from __future__ import annotations

from build_utils.models.build_metadata import ProjectType
from build_utils.models.project import Project
from build_utils.tasks.cdk_deploy import CdkDeployTaskBuilder
from build_utils.tasks.clean import CleanTaskBuilder
from build_utils.tasks.docs import DocsTaskBuilder
from build_utils.tasks.task_builder import BuildTask, TaskBuilder, require_project


def get_task_builders(project: Project) -> list[TaskBuilder]:
    require_project(project)
    builders: list[TaskBuilder] = [CleanTaskBuilder(), DocsTaskBuilder(project.language)]
    if project.project_type is ProjectType.AWS_MICROSERVICE:
        builders.extend(CdkDeployTaskBuilder(key) for key in project.get_cdk_stacks())
    return builders


def build_tasks(project: Project) -> list[BuildTask]:
    """Build every task that applies to ``project``, in builder order."""
    return [builder.build_task(project) for builder in get_task_builders(project)]
