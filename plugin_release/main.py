import asyncio
import json
import os
from pathlib import Path

import click

from plugin_release.core.config import Settings
from plugin_release.core.context import set_plugin, set_run_id
from plugin_release.core.exceptions import ReleaseError
from plugin_release.core.logging import get_logger, setup_logging
from plugin_release.domain.release.parsers import parse_changed_plugins
from plugin_release.domain.release.schemas import ChangelogResult, ChangeWindow, ReleaseRequest
from plugin_release.domain.release.service import load_plugin_info, resolve_changelog
from plugin_release.domain.release.workflow import ReleaseServices, run_release
from plugin_release.infra.build.builder import YarnWorkspaceBuilder, build_and_zip
from plugin_release.infra.git.client import GitClient
from plugin_release.infra.github.actions import write_output
from plugin_release.infra.github.client import GitHubClient
from plugin_release.infra.llm.client import generate_changelog
from plugin_release.infra.marketplace.client import MarketplaceClient
from plugin_release.infra.notify.slack import SlackNotifier

logger = get_logger(__name__)


def _github_client(settings: Settings) -> GitHubClient:
    if not settings.github_repository:
        raise click.UsageError("GITHUB_REPOSITORY must be set to read pull requests")
    return GitHubClient(
        settings.github_repository,
        token=settings.github_token or None,
        timeout=settings.github_timeout,
    )


async def _fetch_pull_files(settings: Settings, pull_number: int) -> list[str]:
    client = _github_client(settings)
    try:
        return await client.get_pull_files(pull_number)
    finally:
        await client.aclose()


async def _fetch_pull_body(settings: Settings, pull_number: int) -> str | None:
    client = _github_client(settings)
    try:
        return await client.get_pull_body(pull_number)
    finally:
        await client.aclose()


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Build, submit and tag marketplace plugin releases."""
    settings = Settings()
    setup_logging(settings.log_level, json_output=settings.is_production)
    set_run_id()
    ctx.obj = settings


@cli.command("changed-plugins")
@click.argument("changed_files", required=False, default="")
@click.option("--pr", "pull_number", type=int, help="Read changed files from this pull request.")
@click.pass_obj
def changed_plugins(settings: Settings, changed_files: str, pull_number: int | None) -> None:
    """Print the plugins touched by CHANGED_FILES as a JSON list."""
    if pull_number is not None:
        try:
            paths = asyncio.run(_fetch_pull_files(settings, pull_number))
        except (ReleaseError, ValueError) as e:
            raise click.ClickException(str(e)) from e
        changed_files = "\n".join(paths)

    plugins = parse_changed_plugins(changed_files, settings.plugins_dir)
    logger.info("변경된 플러그인 count=%d plugins=%s", len(plugins), plugins)

    payload = json.dumps(plugins)
    write_output(settings.github_output, "plugins", payload)
    write_output(settings.github_output, "has_changes", "true" if plugins else "false")
    click.echo(payload)


@cli.command("changelog")
@click.argument("plugin_path", type=click.Path(exists=True, file_okay=False))
@click.option("--pr-body", default=None, help="Pull request description to search.")
@click.option("--pr", "pull_number", type=int, help="Read the description of this pull request.")
@click.pass_obj
def changelog(
    settings: Settings,
    plugin_path: str,
    pr_body: str | None,
    pull_number: int | None,
) -> None:
    """Resolve the changelog for PLUGIN_PATH.

    Uses the pull request's Changelog section when present, otherwise
    generates one from the changes since the plugin's last release tag.
    """
    repo_root = Path(settings.repo_root).resolve()

    async def _generate(plugin_name: str, window: ChangeWindow) -> str:
        return await generate_changelog(plugin_name, window, settings)

    async def _resolve() -> ChangelogResult | None:
        body = pr_body
        if body is None and pull_number is not None:
            body = await _fetch_pull_body(settings, pull_number)

        plugin = load_plugin_info(plugin_path)
        set_plugin(plugin.name)
        return await resolve_changelog(
            plugin=plugin,
            plugin_rel_path=os.path.relpath(plugin.path, repo_root),
            pr_body=body,
            git=GitClient(repo_root),
            generate=_generate,
            max_chars=settings.max_diff_chars,
        )

    try:
        result = asyncio.run(_resolve())
    except (ReleaseError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if result is None:
        raise click.ClickException("No changes found since the last release")

    write_output(settings.github_output, "changelog", result.text)
    write_output(settings.github_output, "changelog_source", result.source)
    click.echo(result.text)


@cli.command("submit")
@click.option("--plugin-path", default=None, help="Overrides PLUGIN_PATH.")
@click.option("--changelog", "changelog_text", default=None, help="Overrides CHANGELOG.")
@click.option("--dry-run", is_flag=True, help="Build and pack without submitting.")
@click.pass_obj
def submit(
    settings: Settings,
    plugin_path: str | None,
    changelog_text: str | None,
    dry_run: bool,
) -> None:
    """Build, pack, submit and tag a plugin release."""
    overrides = {
        key: value
        for key, value in {
            "plugin_path": plugin_path,
            "changelog": changelog_text,
            "dry_run": True if dry_run else None,
        }.items()
        if value is not None
    }
    settings = settings.model_copy(update=overrides)

    try:
        settings.require_submission()
    except ReleaseError as e:
        raise click.ClickException(str(e)) from e

    logger.info(
        "설정 로드 완료 plugin_path=%s api_base=%s dry_run=%s",
        settings.plugin_path,
        settings.creators_api_base,
        settings.dry_run,
    )

    final_state = asyncio.run(_submit(settings))

    if final_state.get("error_code"):
        raise click.ClickException(final_state.get("error_message", "Release failed"))

    submission = final_state.get("submission")
    if submission and submission.version:
        click.echo(f"Submitted version {submission.version}")
    if final_state.get("tag_name"):
        click.echo(f"Tagged {final_state['tag_name']}")
    click.echo("Done!")


async def _submit(settings: Settings) -> dict:
    repo_root = Path(settings.repo_root).resolve()
    marketplace = None
    if not settings.dry_run:
        marketplace = MarketplaceClient(
            settings.creators_api_base,
            session_token=settings.session_token,
            admin_secret=settings.framer_admin_secret,
            timeout=settings.submission_timeout,
        )
    notifier = None
    if settings.slack_webhook_url:
        notifier = SlackNotifier(settings.slack_webhook_url, timeout=settings.slack_timeout)

    services = ReleaseServices(
        builder=YarnWorkspaceBuilder(repo_root),
        tags=GitClient(repo_root),
        marketplace=marketplace,
        notifier=notifier,
    )
    request = ReleaseRequest(
        plugin_path=str(Path(settings.plugin_path).resolve()),
        changelog=settings.changelog,
        repo_root=str(repo_root),
        dry_run=settings.dry_run,
    )

    try:
        return await run_release(request, services)
    finally:
        if marketplace:
            await marketplace.aclose()
        if notifier:
            await notifier.aclose()


@cli.command("pack")
@click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Plugin directory.",
)
@click.option("--skip-build", is_flag=True, help="Only zip the existing dist directory.")
def pack(cwd: str, skip_build: bool) -> None:
    """Build the plugin in CWD and zip its dist directory into plugin.zip."""
    try:
        zip_path = build_and_zip(cwd, skip_build=skip_build)
    except ReleaseError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"{zip_path} has been created")


cli.add_command(pack, "prepare")


if __name__ == "__main__":
    cli()
