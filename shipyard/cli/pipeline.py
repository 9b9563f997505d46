"""``shipyard pipeline`` commands.

Commands:
    - init: Create the pipeline manifest, buildspec and access-token secret
    - show: Describe the pipeline of the current workspace

Example:
    Bootstrap a pipeline tracking GitHub::

        $ shipyard app link demo
        $ shipyard pipeline init --url https://github.com/koke/repo-man -e test -e prod \\
            --github-access-token "$GITHUB_TOKEN"
        $ shipyard pipeline show
"""

import sys

import click
import structlog

from shipyard.cli.common import build_secrets_manager, build_store, build_workspace, get_settings
from shipyard.config.session import SettingsSessionProvider
from shipyard.enums import ProvisionStatus
from shipyard.exceptions import ShipyardError
from shipyard.git.runner import GitCommandRunner
from shipyard.pipeline.describe import PipelineDescriber
from shipyard.pipeline.init import InitPipelineOpts, InitPipelineVars
from shipyard.pipeline.provisioner import ProvisionResult, StepResult
from shipyard.prompt import ClickPrompter
from shipyard.rendering.engine import TemplateEngine

log = structlog.get_logger(__name__)


@click.group(name="pipeline")
def pipeline_group() -> None:
    """Create and inspect continuous-delivery pipelines."""
    pass


@pipeline_group.command(name="init")
@click.option("--app", "-a", "app_name", default="", help="Name of the application (defaults to the workspace's)")
@click.option("--url", "-u", "repo_url", default="", help="URL of the source repository (discovered from git remotes if omitted)")
@click.option("--git-branch", "-b", default="", help="Branch the pipeline tracks (defaults to the current branch)")
@click.option(
    "--environments",
    "-e",
    multiple=True,
    help="Environments to deploy to, in order (repeat the option for each environment)",
)
@click.option(
    "--github-access-token",
    "-t",
    default="",
    envvar="SHIPYARD_GITHUB_ACCESS_TOKEN",
    help="GitHub personal access token stored as the pipeline's source secret",
)
@click.pass_context
def init_command(
    ctx: click.Context,
    app_name: str,
    repo_url: str,
    git_branch: str,
    environments: tuple[str, ...],
    github_access_token: str,
) -> None:
    """Create a pipeline for the application in the current workspace.

    Examples:

        shipyard pipeline init

        shipyard pipeline init --url codecommit::us-west-2://repo-man -e test -e prod
    """
    settings = get_settings(ctx)
    workspace = build_workspace(settings)
    store = build_store(settings)
    opts = InitPipelineOpts(
        InitPipelineVars(
            app_name=app_name,
            repo_url=repo_url,
            git_branch=git_branch,
            environments=list(environments),
            github_access_token=github_access_token,
        ),
        workspace=workspace,
        store=store,
        resources=store,
        secrets=build_secrets_manager(settings),
        renderer=TemplateEngine(),
        sessions=SettingsSessionProvider(settings),
        prompter=ClickPrompter(),
        runner=GitCommandRunner(settings.workspace_root),
    )

    try:
        result = opts.run()
    except ShipyardError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        log.debug("pipeline_init_error", exc_info=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)
    except Exception as e:
        click.echo(click.style(f"Unexpected error: {e}", fg="red"), err=True)
        log.error("pipeline_init_unexpected", exc_info=True)
        sys.exit(1)

    _print_result(result)


def _print_step(label: str, step: StepResult) -> None:
    if step.status is ProvisionStatus.SKIPPED:
        return
    if step.status is ProvisionStatus.CREATED:
        click.echo(click.style(f"  + {label}", fg="green") + f"  {step.location}")
    else:
        click.echo(click.style(f"  = {label}", fg="yellow") + f"  {step.location} (already exists)")


def _print_result(result: ProvisionResult) -> None:
    click.echo()
    click.echo(click.style(f"Pipeline {result.pipeline_name}", bold=True))
    _print_step("Secret", result.secret)
    _print_step("Manifest", result.manifest)
    _print_step("Buildspec", result.buildspec)
    click.echo()
    click.echo("Commit and push the shipyard/ directory to your repository to trigger the pipeline.")


@pipeline_group.command(name="show")
@click.option("--json", "as_json", is_flag=True, help="Print the pipeline as JSON")
@click.pass_context
def show_command(ctx: click.Context, as_json: bool) -> None:
    """Describe the pipeline of the current workspace."""
    settings = get_settings(ctx)
    try:
        description = PipelineDescriber(build_workspace(settings)).describe()
    except ShipyardError as e:
        click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
        log.debug("pipeline_show_error", exc_info=True)
        sys.exit(1)

    click.echo(description.json_string() if as_json else description.human_string(), nl=False)
