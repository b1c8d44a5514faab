# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/etcdjoin/cli/app.py
from __future__ import annotations

import typer

from etcdjoin.bootstrap.engine import BootstrapEngine, Decision
from etcdjoin.config.loader import load_config, load_options
from etcdjoin.errors import BootstrapError
from etcdjoin.logging.log import init_logging
from etcdjoin.utils.execution import ExecutionContext


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Bootstrap agent that joins this node to an etcd cluster")


def _bootstrap(*, dry_run: bool, debug: bool) -> Decision:
    """
    Shared body of run/plan. Every BootstrapError ends the process with
    status 1 after it has been logged.
    """
    try:
        options = load_options()
    except BootstrapError as exc:
        init_logging(level="debug" if debug else "info")[0].error("%s", exc)
        raise typer.Exit(code=1)

    logger, run_id, log_path = init_logging(
        level="debug" if debug else options.log_level,
        log_dir=options.log_dir,
    )

    try:
        config = load_config(options)
        engine = BootstrapEngine(config)
        return engine.run(ExecutionContext(dry_run=dry_run))
    except BootstrapError as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=1)


# ------------------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------------------

@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Log at debug level"),
):
    """Bare `etcdjoin` behaves like `etcdjoin run` so it can be an entrypoint."""
    if ctx.invoked_subcommand is None:
        _bootstrap(dry_run=False, debug=debug)


@app.command()
def run(
    debug: bool = typer.Option(False, "--debug", help="Log at debug level"),
):
    """Decide how to start etcd, then exec it."""
    _bootstrap(dry_run=False, debug=debug)


@app.command()
def plan(
    debug: bool = typer.Option(False, "--debug", help="Log at debug level"),
):
    """Show what `run` would do without starting etcd."""
    decision = _bootstrap(dry_run=True, debug=debug)

    typer.secho(f"role   : {decision.role.value}", bold=True)
    typer.echo(f"reason : {decision.reason}")
    typer.echo("")
    for key in sorted(decision.env):
        typer.echo(f"{key}={decision.env[key]}")


if __name__ == "__main__":
    app()
