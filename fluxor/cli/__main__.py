"""Fluxor CLI - Main Entry Point.

Commands:
    discover - Scan modules and report discovered effects and reducers
    config   - Show the effective configuration
"""

from dataclasses import asdict
from typing import Optional

import click

from . import __version__, __cli_name__
from .utils.colors import banner, error, kv


@click.group()
@click.version_option(version=__version__, prog_name=__cli_name__)
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx, verbose: bool):
    """Effect and reducer discovery for dependency-injected stores."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


@cli.command('discover')
@click.argument('modules', nargs=-1)
@click.option('--lifetime', type=click.Choice(['scoped', 'singleton']), default=None,
              help='Registration lifetime (overrides FLUXOR_LIFETIME)')
@click.option('--env-file', type=click.Path(dir_okay=False), default=None,
              help='Read FLUXOR_* settings from a .env file')
@click.option('--json', 'as_json', is_flag=True, help='Print the report as JSON')
@click.pass_context
def discover(ctx, modules, lifetime: Optional[str], env_file: Optional[str], as_json: bool):
    """
    Scan MODULES for effects and reducers.

    Examples:
      fluxor discover my_app.store
      fluxor discover my_app.store --lifetime singleton
      fluxor discover --env-file .env --json
    """
    from .commands.discover import run_discover

    run_discover(
        modules,
        lifetime=lifetime,
        env_file=env_file,
        as_json=as_json,
        verbose=ctx.obj.get('verbose', False),
    )


@cli.command('config')
@click.option('--env-file', type=click.Path(dir_okay=False), default=None,
              help='Read FLUXOR_* settings from a .env file')
@click.pass_context
def show_config(ctx, env_file: Optional[str]):
    """Show the effective configuration."""
    from fluxor.config import ConfigLoader
    from fluxor.faults import Fault

    try:
        config = ConfigLoader.load(env_file=env_file)
    except Fault as e:
        error(str(e))
        ctx.exit(1)
    banner("Fluxor Config")
    for key, value in asdict(config).items():
        if isinstance(value, tuple):
            value = ", ".join(value) or "-"
        kv(key, str(value))


def main():
    """Entry point for `fluxor` command."""
    cli(obj={})


if __name__ == '__main__':
    main()
