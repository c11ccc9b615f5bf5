"""bundlesync CLI: the main entry point for bundle import synchronization."""

import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bundlesync import __version__

console = Console()

EXIT_OUT_OF_DATE = 1
EXIT_FATAL = 2


@click.group()
@click.version_option(version=__version__)
def main():
    """bundlesync: keep pom.xml Import-Package in step with MANIFEST.MF.

    Run after the bundle manifest has been generated and before packaging.
    """


def _load(config_path: str | None):
    from bundlesync.config import load_config

    return load_config(config_path)


# ── Sync ─────────────────────────────────────────────────────────────


@main.command()
@click.argument("module_root", default=".", type=click.Path(file_okay=False))
@click.option("--output-dir", "-d", default=None, help="Build output directory (default: target/classes)")
@click.option("--config", "-c", "config_path", default=None, help="YAML config file")
@click.option("--check", is_flag=True, help="Report drift without writing; exit 1 if out of date")
@click.option("--force", is_flag=True, help="Rewrite the descriptor even when imports match")
@click.option("--log-level", default=None, help="Logging level (default: INFO)")
def sync(
    module_root: str,
    output_dir: str | None,
    config_path: str | None,
    check: bool,
    force: bool,
    log_level: str | None,
):
    """Synchronize MODULE_ROOT's pom.xml with its generated manifest."""
    from bundlesync.errors import SyncError
    from bundlesync.sync.reconcile import ImportSynchronizer, ModuleContext
    from bundlesync.utils.logging import LoggingSink, configure_logging, get_logger

    configure_logging(log_level)

    try:
        config = _load(config_path)
        context = ModuleContext.from_module_root(module_root, config, output_dir)
        synchronizer = ImportSynchronizer(config, LoggingSink(get_logger("bundlesync.sync")))
        report = synchronizer.run(context, dry_run=check, force=force)
    except SyncError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_FATAL)

    style = "yellow" if report.changed and not report.written else "green"
    console.print(Panel(report.summary(), title="Import-Package", border_style=style))

    for spec in report.added:
        console.print(f"  [green]+[/] {escape(spec)}")
    for spec in report.removed:
        console.print(f"  [red]-[/] {escape(spec)}")

    if check and report.changed:
        sys.exit(EXIT_OUT_OF_DATE)


# ── Imports ──────────────────────────────────────────────────────────


@main.command()
@click.argument("module_root", default=".", type=click.Path(file_okay=False))
@click.option("--output-dir", "-d", default=None, help="Build output directory (default: target/classes)")
@click.option("--config", "-c", "config_path", default=None, help="YAML config file")
def imports(module_root: str, output_dir: str | None, config_path: str | None):
    """Compare the manifest's package imports with the pom's."""
    from bundlesync.errors import SyncError
    from bundlesync.sync.descriptor import find_configuration_node, load_descriptor
    from bundlesync.sync.imports import normalize
    from bundlesync.sync.manifest import extract
    from bundlesync.sync.reconcile import ModuleContext

    try:
        config = _load(config_path)
        context = ModuleContext.from_module_root(module_root, config, output_dir)
        raw = extract(context.output_directory, config)
        if raw is None:
            console.print("[yellow]No manifest found in build output.[/]")
            return
        manifest_imports = normalize(raw)
        node = find_configuration_node(load_descriptor(context.descriptor_path), config)
        pom_imports = normalize(node.text)
    except SyncError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_FATAL)

    in_pom = set(pom_imports)
    in_manifest = set(manifest_imports)

    table = Table(title=f"Package imports ({len(manifest_imports)} in manifest)")
    table.add_column("Import", style="cyan")
    table.add_column("Status", justify="center")

    for spec in manifest_imports:
        status = "[green]in sync[/]" if spec in in_pom else "[yellow]added[/]"
        table.add_row(escape(spec), status)
    for spec in pom_imports:
        if spec not in in_manifest:
            table.add_row(escape(spec), "[red]removed[/]")

    console.print(table)


# ── Config ───────────────────────────────────────────────────────────


@main.command(name="config")
@click.option("--config", "-c", "config_path", default=None, help="YAML config file")
def show_config(config_path: str | None):
    """Print the effective configuration as YAML."""
    from bundlesync.config import dump_config
    from bundlesync.errors import ConfigError

    try:
        config = _load(config_path)
    except ConfigError as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(EXIT_FATAL)

    click.echo(dump_config(config), nl=False)


if __name__ == "__main__":
    main()
