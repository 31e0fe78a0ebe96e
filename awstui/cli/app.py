from __future__ import annotations

import logging

import boto3
import typer
from botocore.exceptions import BotoCoreError
from rich.console import Console
from rich.markup import escape

from awstui.config.store import SettingsStore
from awstui.logs import setup_logging
from awstui.repo.clients import Repositories
from awstui.ui.app import AwsTuiApp
from awstui.ui.picker import DispatchError, ServicePicker, check_dispatch
from awstui.ui.view import Navigator, View
from awstui.ui.views.registry import view_factories

console = Console()
logger = logging.getLogger(__name__)


def _has_credentials(session: boto3.session.Session) -> bool:
    try:
        return session.get_credentials() is not None
    except BotoCoreError as exc:
        logger.warning("Resolving credentials failed: %s", exc)
        return False


def run() -> None:
    """Browse AWS resources in the terminal."""
    setup_logging()

    session = boto3.Session()
    if not _has_credentials(session):
        console.print(
            "[red]Unable to locate AWS credentials. "
            "Configure them with `aws configure` or the AWS_* environment variables.[/]"
        )
        raise typer.Exit(1)

    settings = SettingsStore()
    load_error = settings.load()
    if load_error:
        console.print(f"[yellow]{escape(load_error)} Using defaults.[/]")

    repos = Repositories(session)
    factories = view_factories(repos, settings)
    try:
        check_dispatch(factories)
    except DispatchError as exc:
        console.print(f"[red]{escape(str(exc))}[/]")
        raise typer.Exit(1)

    def root(nav: Navigator) -> View:
        return ServicePicker(nav, settings, factories)

    logger.info("Starting in region %s", repos.region or "unknown")
    AwsTuiApp(root=root, identity=repos.identity, region=repos.region).run()


def cli() -> None:
    typer.run(run)


if __name__ == "__main__":
    cli()
