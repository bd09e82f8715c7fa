"""
collect_inventory — CLI entrypoint.

Usage:
    collect-inventory [--no-network] [--no-gpu] [--skip-install]
    python -m collect_inventory --help

Writes a timestamped snapshot to the output directory and echoes the
same text on stdout. Prompts, warnings and logs go to stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from collect_inventory import SCRIPT_LABEL, __version__
from collect_inventory.adapters.shell.command import HostProbe
from collect_inventory.core.config.loader import ConfigError, InventorySettings, load_settings
from collect_inventory.core.models.run_config import RunConfig
from collect_inventory.core.observability.logging_config import setup_from_environment
from collect_inventory.core.services.platform_profile import required_tools, resolve_platform
from collect_inventory.core.services.report import ReportAssembler
from collect_inventory.core.services.tool_install.detection.package_manager import (
    detect_package_manager,
)
from collect_inventory.core.services.tool_install.resolver.dependency_resolver import (
    DependencyResolver,
)

logger = logging.getLogger(__name__)


class InventoryCommand(click.Command):
    """Command whose usage errors exit with status 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


@click.command(
    cls=InventoryCommand,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name=SCRIPT_LABEL)
@click.option("--no-network", is_flag=True, help="Skip the network interfaces section.")
@click.option("--no-gpu", is_flag=True, help="Skip the graphics section.")
@click.option(
    "--skip-install", is_flag=True,
    help="Never prompt to install missing helper tools.",
)
@click.option(
    "--output-dir", "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the report file (default: current directory).",
)
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to collect_inventory.yml (default: auto-detect).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def cli(
    no_network: bool,
    no_gpu: bool,
    skip_install: bool,
    output_dir: Path | None,
    config_path: Path | None,
    verbose: bool,
    debug: bool,
) -> None:
    """Collect an OS and hardware inventory of this machine.

    The report is saved as collect_inventory_YYYYMMDD_HHMMSS.txt and
    printed to the terminal at the same time.
    """
    config_error: ConfigError | None = None
    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        config_error = e
        settings = InventorySettings()

    # ── Logging setup (once, at process start) ──────────────────
    setup_from_environment(debug=debug, verbose=verbose, settings_level=settings.log_level)
    if config_error is not None:
        logger.warning("Ignoring settings: %s", config_error)

    config = RunConfig(
        include_network=not no_network,
        include_gpu=not no_gpu,
        allow_install=not skip_install,
    )

    probe = HostProbe(timeout=settings.command_timeout)
    profile = resolve_platform(probe)
    pm = detect_package_manager(probe.which)

    resolver = DependencyResolver(profile, pm, probe, package_overrides=settings.packages)
    resolver.ensure_all(required_tools(profile, config), config.allow_install)

    directory = output_dir or (Path(settings.output_dir) if settings.output_dir else Path.cwd())
    try:
        directory.mkdir(parents=True, exist_ok=True)
        assembler = ReportAssembler(profile, config, probe)
        _, path = assembler.stream_to(click.get_binary_stream("stdout"), directory)
    except OSError as e:
        raise click.ClickException(f"Cannot write report: {e}") from e

    click.echo(f"Report stored in {path}", err=True)


def main() -> None:
    cli(prog_name=SCRIPT_LABEL)


if __name__ == "__main__":
    main()
