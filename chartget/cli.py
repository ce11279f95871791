"""chartget CLI — fetch, inspect and publish charts in a local OCI-style registry."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from chartget import __version__, config
from chartget.errors import ChartGetError

console = Console()
err_console = Console(stderr=True)


def _fail(error: ChartGetError) -> None:
    err_console.print(f"[red]Error[/] ({error.kind.value}): {error.message}")
    sys.exit(1)


def _fail_io(error: OSError, target: object) -> None:
    err_console.print(f"[red]Error[/] (io): {target}: {error.strerror or error}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default=config.LOG_LEVEL,
    type=click.Choice(config.LOG_LEVELS, case_sensitive=False),
    help="Set the logging level",
)
def main(log_level: str):
    """chartget — retrieve charts from OCI registries.

    URLs take the form oci://<host>/<path>[:<tag>]. When the URL has no
    tag, pass --version; when it has one, the tag is used as given.
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


# ── Fetch ────────────────────────────────────────────────────────────


@main.command()
@click.argument("url")
@click.option("--version", "-v", "version", default="", help="Chart version to use when URL has no tag")
@click.option("--registry-dir", "-r", default=config.REGISTRY_DIR, help="Registry directory")
@click.option("--output-dir", "-o", default=".", help="Directory to write the archive to")
def fetch(url: str, version: str, registry_dir: str, output_dir: str):
    """Fetch a chart archive by oci:// URL."""
    from chartget.registry.getter import RegistryGetter
    from chartget.registry.local import LocalRegistryClient

    console.print(f"\n[bold blue]chartget[/] — Fetching: {url}\n")

    getter = RegistryGetter(LocalRegistryClient(registry_dir))
    try:
        response = getter.get_with_details(url, version)
    except ChartGetError as e:
        _fail(e)

    out_path = Path(output_dir) / response.filename
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_bytes(response.chart_content)
    except OSError as e:
        _fail_io(e, out_path)

    console.print(
        Panel(
            f"{response.filename}\n{len(response.chart_content)} bytes",
            title="Saved",
        )
    )
    console.print(f"[green]Written to:[/] {out_path}")


# ── Resolve ──────────────────────────────────────────────────────────


@main.command()
@click.argument("reference")
def resolve(reference: str):
    """Show how a host/path[:tag] reference is parsed.

    REFERENCE may also be given as an oci:// URL.
    """
    from chartget.registry.getter import resolve_url
    from chartget.registry.reference import parse_reference

    try:
        if "://" in reference:
            ref = resolve_url(reference)
        else:
            ref = parse_reference(reference)
    except ChartGetError as e:
        _fail(e)

    console.print(f"  Repository: [cyan]{ref.repository}[/]")
    console.print(f"  Tag:        {escape(ref.tag) if ref.tag is not None else '[dim](none)[/]'}")


# ── Push ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("chart_dir")
@click.argument("reference")
@click.option("--registry-dir", "-r", default=config.REGISTRY_DIR, help="Registry directory")
def push(chart_dir: str, reference: str, registry_dir: str):
    """Package a chart directory into the local registry.

    REFERENCE is host/path[:tag]; without a tag the chart's own version is used.
    """
    from chartget.chart.archive import load_directory
    from chartget.registry.local import LocalRegistryClient
    from chartget.registry.reference import parse_reference

    try:
        chart = load_directory(chart_dir)
        ref = parse_reference(reference)
        if ref.tag is None:
            ref = ref.with_tag(chart.version)
        path = LocalRegistryClient(registry_dir).push_chart(chart, ref)
    except ChartGetError as e:
        _fail(e)
    except OSError as e:
        _fail_io(e, registry_dir)

    console.print(f"  Pushed: [cyan]{chart.qualified_id}[/] -> {ref.full_name}")
    console.print(f"  [dim]{path}[/]")


# ── Tags ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("repository")
@click.option("--registry-dir", "-r", default=config.REGISTRY_DIR, help="Registry directory")
def tags(repository: str, registry_dir: str):
    """List the tags stored for a repository."""
    from chartget.registry.local import LocalRegistryClient

    try:
        found = LocalRegistryClient(registry_dir).list_tags(repository)
    except ChartGetError as e:
        _fail(e)

    if not found:
        console.print("[yellow]No tags found.[/]")
        return

    table = Table(title=f"{repository} ({len(found)} tags)")
    table.add_column("Tag", style="cyan")
    for tag in found:
        table.add_row(escape(tag))

    console.print(table)


if __name__ == "__main__":
    main()
