"""CLI for git-source."""

import json
import sys
from pathlib import Path

import click
import structlog

from git_source.config.logging import configure_logging

logger = structlog.get_logger(__name__)


def _read_json(path: str):
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        click.echo(f"Error: {path} is not valid JSON: {exc}", err=True)
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """git-source: trait-composed git sources and push-notification routing."""
    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(log_level=log_level)


@cli.command()
def serve() -> None:
    """Run the HTTP API."""
    from git_source.api.main import run

    run()


@cli.command()
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
def migrate(source_file: str) -> None:
    """Print the traits a stored source resolves to.

    SOURCE_FILE holds one source as JSON, in the trait form or with the
    legacy fields (remoteName, rawRefSpecs, includes, excludes, ...).
    """
    from pydantic import ValidationError as PydanticValidationError

    from git_source.core.exceptions import GitSourceError
    from git_source.sources.models import GitSource

    data = _read_json(source_file)
    try:
        source = GitSource.model_validate(data)
    except GitSourceError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)
    except PydanticValidationError as exc:
        click.echo(f"Error: invalid source: {exc}", err=True)
        sys.exit(1)

    click.echo(json.dumps(source.model_dump(mode="json"), indent=2))
    click.echo(f"Ref specs: {source.raw_ref_specs}")


@cli.command()
@click.option("--sources", "-s", "sources_file", required=True, type=click.Path(exists=True, dir_okay=False), help="JSON sources file")
@click.option("--url", "-u", required=True, help="Repository URL that changed")
@click.option("--branch", "-b", "branches", multiple=True, help="Branch that changed (repeatable)")
@click.option("--sha1", default=None, help="Commit the branches now point at")
@click.option("--origin", default="cli", help="Origin label for the event")
def notify(sources_file: str, url: str, branches: tuple[str, ...], sha1: str | None, origin: str) -> None:
    """Dry-run a commit notification against a sources file.

    Indexing requests are logged, not executed.
    """
    from git_source.config.settings import get_settings
    from git_source.core.exceptions import GitSourceError
    from git_source.notifications.registry import InMemorySourceRegistry
    from git_source.notifications.scheduler import LoggingIndexingScheduler
    from git_source.services.notification import NotificationService
    from git_source.services.sources import SourceService

    settings = get_settings()
    registry = InMemorySourceRegistry()
    try:
        SourceService(registry).load_file(sources_file)
        service = NotificationService.create(registry, LoggingIndexingScheduler(), settings)
        result = service.notify_commit(origin=origin, url=url, sha1=sha1, branches=list(branches))
    except GitSourceError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    for contributor in result.contributors:
        for name, value in contributor.headers():
            click.echo(f"{name}: {value}")
        click.echo(contributor.body())

    if result.affected:
        click.echo("\nAffected heads:")
        for item in result.affected:
            if item.excluded:
                outcome = "excluded"
            elif item.revision is not None:
                outcome = item.revision.hash
            else:
                outcome = "unknown revision"
            click.echo(f"  {item.owner} [{item.source_id}] {item.branch} -> {outcome}")


@cli.command(name="sources")
@click.option("--sources", "-s", "sources_file", default=None, help="JSON sources file (default: settings)")
def list_sources(sources_file: str | None) -> None:
    """List tracked sources and their effective ref specs."""
    from git_source.config.settings import get_settings
    from git_source.core.exceptions import GitSourceError
    from git_source.core.security import PrivilegeScope
    from git_source.notifications.registry import InMemorySourceRegistry
    from git_source.services.sources import SourceService

    settings = get_settings()
    service = SourceService(InMemorySourceRegistry())
    try:
        service.load_file(sources_file or settings.sources_file)
    except GitSourceError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        sys.exit(1)

    owners = service.list_owners(PrivilegeScope.system())
    if not owners:
        click.echo("No sources tracked.")
        return
    for owner in owners:
        click.echo(owner.full_display_name)
        for source in owner.sources:
            flags = " (ignores push notifications)" if source.ignore_on_push_notifications else ""
            click.echo(f"  - {source.remote}{flags}")
            click.echo(f"    traits:    {', '.join(t.kind for t in source.traits)}")
            click.echo(f"    ref specs: {source.raw_ref_specs}")


if __name__ == "__main__":
    cli()
