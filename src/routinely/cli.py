"""Flask CLI commands for Routinely."""

from __future__ import annotations

import json

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("routinely-checkin")
    @click.argument("routine_id")
    def routinely_checkin(routine_id: str) -> None:
        """Record a check-in for ROUTINE_ID."""

        from .exceptions import ValidationError
        from .extensions import get_extension

        try:
            checkin = get_extension("checkin_service", app).record_checkin(routine_id)
        except ValidationError as exc:
            raise click.BadParameter(str(exc), param_hint="ROUTINE_ID") from exc
        click.echo(f"Recorded check-in #{checkin.id} for routine {checkin.routine_id}.")

    @app.cli.command("routinely-stats")
    @click.option("--pretty/--compact", default=True, help="Indent the JSON output")
    def routinely_stats(pretty: bool) -> None:
        """Print the dashboard statistics as JSON."""

        from .extensions import get_extension

        stats = get_extension("checkin_service", app).compute_stats()
        click.echo(json.dumps(stats.to_dict(), indent=2 if pretty else None))
