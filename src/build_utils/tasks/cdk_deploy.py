"""Per-stack CDK deploy task for AWS microservices."""

from __future__ import annotations

from build_utils.models.project import Project
from build_utils.tasks.task_builder import BuildTask, TaskBuilder


class CdkDeployTaskBuilder(TaskBuilder):
    """Describe ``cdk deploy`` for the stack registered under ``stack_key``."""

    def __init__(self, stack_key: str) -> None:
        if not isinstance(stack_key, str) or not stack_key:
            msg = "Invalid stack key (arg #1)"
            raise ValueError(msg)
        super().__init__(f"cdk-deploy-{stack_key}", f"Deploys the {stack_key} CDK stack")
        self._stack_key = stack_key

    @property
    def stack_key(self) -> str:
        return self._stack_key

    def _create_task(self, project: Project) -> BuildTask:
        stack_name = project.get_cdk_stack_name(self._stack_key)

        command = ["cdk", "deploy", stack_name]
        if project.aws_profile:
            command.extend(["--profile", project.aws_profile])

        environment = {}
        if project.aws_region:
            environment["AWS_REGION"] = project.aws_region

        sources = [project.root_dir.get_child("infra").get_all_files_glob(project.language.value)]
        targets = [project.root_dir.get_child("cdk.out").path]
        return self._task(sources=sources, targets=targets, command=command, environment=environment)
