"""The ``pipeline init`` command object.

``InitPipelineOpts`` follows a validate -> ask -> execute lifecycle:

    validate  check the workspace and application before asking anything
    ask       settle the repository and environments, prompting if needed
    execute   detect the branch, name the pipeline and provision it

Example:
    >>> opts = InitPipelineOpts(InitPipelineVars(repo_url="https://github.com/koke/repo-man"), ...)
    >>> result = opts.run()
    >>> result.pipeline_name
    'pipeline-demo-repo-man'
"""

from dataclasses import dataclass, field

import structlog

from shipyard.config.session import SessionProvider
from shipyard.config.store import AppResourcesGetter, ConfigStore
from shipyard.exceptions import PipelineError, ShipyardError
from shipyard.git.discovery import GitDiscovery
from shipyard.git.models import ParsedRepository
from shipyard.git.parser import parse_repo_url
from shipyard.git.runner import CommandRunner
from shipyard.pipeline.environments import PipelineEnvironment, resolve_environments
from shipyard.pipeline.naming import build_pipeline_name
from shipyard.pipeline.provisioner import ArtifactProvisioner, ProvisionResult
from shipyard.pipeline.region import check_repository_region
from shipyard.prompt import Prompter
from shipyard.rendering.engine import TemplateParser
from shipyard.secrets.store import SecretsManager
from shipyard.workspace import Workspace

log = structlog.get_logger(__name__)

SELECT_ENVS_PROMPT = "Which environments would you like to add to your pipeline?"
SELECT_ENVS_HELP = "Adds an environment that corresponds to a deployment stage in your pipeline. Environments are added sequentially."
FINISH_SELECTION = "[No additional environments]"


@dataclass
class InitPipelineVars:
    """Values supplied on the command line."""

    app_name: str = ""
    repo_url: str = ""
    git_branch: str = ""
    environments: list[str] = field(default_factory=list)
    github_access_token: str = ""


class InitPipelineOpts:
    """Bootstraps a pipeline for the application linked to a workspace.

    Attributes:
        vars: Command-line values
        app_name: Application resolved by validate()
        repository: Source repository resolved by ask()
        environments: Deployment stages resolved by ask()
    """

    def __init__(
        self,
        vars: InitPipelineVars,
        *,
        workspace: Workspace,
        store: ConfigStore,
        resources: AppResourcesGetter,
        secrets: SecretsManager,
        renderer: TemplateParser,
        sessions: SessionProvider,
        prompter: Prompter,
        runner: CommandRunner,
    ) -> None:
        self.vars = vars
        self.workspace = workspace
        self.store = store
        self.sessions = sessions
        self.prompter = prompter
        self.discovery = GitDiscovery(runner)
        self.provisioner = ArtifactProvisioner(store, resources, secrets, workspace, renderer)

        self.app_name = ""
        self.repository: ParsedRepository | None = None
        self.environments: list[PipelineEnvironment] = []

    def validate(self) -> None:
        """Check that the workspace is linked to an existing application.

        Raises:
            NoAppInWorkspaceError: If the workspace is not linked
            PipelineError: If --app conflicts with the workspace or the application is unknown
        """
        workspace_app = self.workspace.app_name()
        if self.vars.app_name and self.vars.app_name != workspace_app:
            raise PipelineError(
                f"cannot specify app {self.vars.app_name} because the workspace is already registered "
                f"with app {workspace_app}"
            )
        self.app_name = workspace_app

        try:
            self.store.get_application(self.app_name)
        except ShipyardError as e:
            raise PipelineError(f"get application {self.app_name} configuration: {e.message}") from e

    def ask(self) -> None:
        """Settle the source repository and the deployment environments.

        Raises:
            RepositoryURLError: If the repository URL cannot be classified
            RegionMismatchError: If a CodeCommit repository is in another region
            PipelineError: If environment selection or lookup fails
        """
        url = self.vars.repo_url or self.discovery.select_repository_url(self.prompter)
        self.repository = parse_repo_url(url)
        log.info("pipeline_source_selected", provider=str(self.repository.provider), url=self.repository.url)

        check_repository_region(self.repository, self.sessions, self.app_name)

        names = self.vars.environments or self._select_environments()
        self.environments = resolve_environments(self.store, self.app_name, names)

    def _select_environments(self) -> list[str]:
        try:
            options = [env.name for env in self.store.list_environments(self.app_name)]
            if not options:
                raise PipelineError(
                    f"no environments found in application {self.app_name}, add one before creating a pipeline"
                )
            return self.prompter.select_many(SELECT_ENVS_PROMPT, SELECT_ENVS_HELP, options, FINISH_SELECTION)
        except ShipyardError as e:
            raise PipelineError(f"select environments: {e.message}") from e

    def execute(self) -> ProvisionResult:
        """Name and provision the pipeline.

        Raises:
            PipelineError: If ask() has not run or provisioning fails
            TemplateError: If the buildspec fails to render
        """
        if self.repository is None:
            raise PipelineError("no source repository selected")

        branch = self.discovery.resolve_branch(self.vars.git_branch)
        pipeline_name = build_pipeline_name(self.app_name, self.repository.name)
        log.info("pipeline_init", pipeline=pipeline_name, branch=branch, environments=len(self.environments))

        return self.provisioner.provision(
            pipeline_name,
            self.app_name,
            self.repository,
            branch,
            self.environments,
            github_token=self.vars.github_access_token,
        )

    def run(self) -> ProvisionResult:
        self.validate()
        self.ask()
        return self.execute()
