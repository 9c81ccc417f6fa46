"""CLI entry point for the jito-speedtest tool."""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version as package_version

import click

from jst.config import ConfigError, JstConfig, load_config
from jst.dispatcher import run_speedtest
from jst.output import FORMATS, render
from jst.update import UpdateError, check_for_update

logger = logging.getLogger(__name__)

DIST_NAME = "jito-speedtest"


def installed_version() -> str:
    """Return the installed distribution version, or ``"unknown"``."""
    try:
        return package_version(DIST_NAME)
    except PackageNotFoundError:
        return "unknown"


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "-c",
    "config_path",
    default=None,
    type=click.Path(exists=False),
    help="Path to YAML config file (default: ~/.jst/config.yaml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Jito block-engine endpoint speed test."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj.setdefault("version", installed_version())
    ctx.obj["config_path"] = config_path

    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@main.command()
@click.option(
    "--testnet",
    "-t",
    is_flag=True,
    help="Test testnet endpoints (default: mainnet).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    default=None,
    type=click.Choice(FORMATS, case_sensitive=False),
    help="Output format (default: text, or default_format from the config).",
)
@click.option(
    "--timeout",
    default=None,
    type=click.FloatRange(min=0, min_open=True),
    help="Per-request timeout in seconds (default: 10).",
)
@click.pass_context
def run(
    ctx: click.Context,
    testnet: bool,
    output_format: str | None,
    timeout: float | None,
) -> None:
    """Measure the latency of every endpoint and print a ranking."""
    cfg = _load_config_or_exit(ctx)
    logger.debug("Config loaded: %s", cfg)

    fmt = (output_format or cfg.default_format).lower()
    network = "testnet" if testnet else "mainnet"

    if fmt != "json":
        if testnet:
            click.echo("🧪 Testing Testnet endpoints...")
        else:
            click.echo("🌐 Testing Mainnet endpoints...")
        click.echo("Measuring connection speed, please wait...\n")

    try:
        result = run_speedtest(
            network,
            timeout=timeout if timeout is not None else cfg.timeout_seconds,
        )
    except Exception as exc:
        logger.debug("Speed test aborted", exc_info=True)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    render(result, fmt)


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Print version information."""
    click.echo(f"Current version: {ctx.obj['version']}")


@main.command()
@click.pass_context
def update(ctx: click.Context) -> None:
    """Check whether a newer release is available."""
    cfg = _load_config_or_exit(ctx)

    try:
        status = check_for_update(
            ctx.obj["version"],
            cfg.update_repo,
            api_url=cfg.update_api_url,
        )
    except UpdateError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if not status.comparable:
        click.echo(
            f"⚠️  Cannot compare installed version {status.current!r} "
            f"with the latest release v{status.latest}"
        )
        return

    if not status.update_available:
        click.echo(f"✅ Already up to date: v{status.current}")
        return

    click.echo(f"⬆️  New version available: v{status.latest} (installed: v{status.current})")
    click.echo(f"   Run: pip install --upgrade {DIST_NAME}")


def _load_config_or_exit(ctx: click.Context) -> JstConfig:
    try:
        return load_config(ctx.obj["config_path"])
    except (ConfigError, FileNotFoundError) as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
