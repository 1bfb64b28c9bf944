"""
CLI command for running discovery against application modules and
reporting what would be registered.
"""

import json
import os
import sys
from typing import Optional, Sequence

import click

from fluxor.config import ConfigLoader, configure_logging
from fluxor.dependency_injection import DiscoveryResult, add_fluxor
from fluxor.di import ServiceCollection
from fluxor.faults import Fault
from ..utils.colors import (
    banner, section, kv, table, bullet, dim, success, warning, _CHECK,
)


def _qualname(obj) -> str:
    return f"{obj.__module__}.{obj.__qualname__}"


def run_discover(
    modules: Sequence[str],
    *,
    lifetime: Optional[str] = None,
    env_file: Optional[str] = None,
    as_json: bool = False,
    verbose: bool = False,
) -> DiscoveryResult:
    """
    Scan ``modules`` (plus any FLUXOR_SCAN_MODULES) and print a report.

    Raises:
        click.UsageError: If there is nothing to scan
    """
    overrides = {"lifetime": lifetime} if lifetime else None
    try:
        config = ConfigLoader.load(env_file=env_file, overrides=overrides)
    except Fault as e:
        raise click.ClickException(str(e))
    configure_logging("DEBUG" if verbose else config.log_level)

    # Make modules in the working directory importable, as `python -m` would
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    if not modules and not config.scan_modules:
        raise click.UsageError("No modules to scan: pass MODULE arguments or set FLUXOR_SCAN_MODULES")

    def configure(options):
        if modules:
            options.scan_assemblies(*modules)

    result = add_fluxor(ServiceCollection(), configure, config=config)

    if as_json:
        click.echo(json.dumps(_as_dict(result), indent=2))
    else:
        _print_report(result)
    return result


def _as_dict(result: DiscoveryResult) -> dict:
    return {
        "lifetime": result.options.registration_scope,
        "scan_targets": [repr(t) for t in result.options.assemblies_to_scan],
        "effects": [_qualname(t) for t in result.effect_types],
        "reducers": [
            {
                "host": _qualname(r.host_class_type),
                "method": r.method_name,
                "action": r.action_type.__name__ if r.action_type else None,
            }
            for r in result.reducers
        ],
        "registered": [d.token for d in result.services],
    }


def _print_report(result: DiscoveryResult) -> None:
    banner("Fluxor Discovery")
    kv("Lifetime", result.options.registration_scope)
    kv("Scan targets", str(len(result.options.assemblies_to_scan)))
    for target in result.options.assemblies_to_scan:
        bullet(repr(target), indent=4)
    click.echo()

    section("Effects")
    if result.effects:
        table(["Effect"], [(_qualname(t),) for t in result.effect_types])
    else:
        dim("  (none)")
    click.echo()

    section("Reducers")
    if result.reducers:
        table(
            ["Host", "Method", "Action"],
            [
                (r.host_class_type.__qualname__, r.method_name, r.action_type.__name__ if r.action_type else "-")
                for r in result.reducers
            ],
        )
    else:
        dim("  (none)")
    click.echo()

    if not result.effects and not result.reducers:
        warning("Nothing discovered - check module names in the scan targets")
    else:
        success(
            f"{_CHECK} {len(result.effects)} effect(s), {len(result.reducers)} reducer(s), "
            f"{len(result.reducer_host_types)} host class(es)"
        )
