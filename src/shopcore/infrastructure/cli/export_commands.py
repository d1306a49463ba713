"""CLI commands for admin bulk exports."""

from __future__ import annotations

import json

import click

from shopcore.application.export_projections import EXPORT_PROJECTIONS
from shopcore.domain.exceptions import DatasetTooLarge, DomainException
from shopcore.domain.model.principal import Role, require_role
from shopcore.infrastructure.bootstrap import export_handler
from shopcore.infrastructure.cli.options import principal_options, to_principal


@click.command("run")
@principal_options
@click.option(
    "--entity",
    "entity_type",
    required=True,
    type=click.Choice(sorted(EXPORT_PROJECTIONS)),
    help="Collection to export.",
)
@click.option("--out", type=click.Path(dir_okay=False, writable=True), help="Write JSON here instead of stdout.")
def export_run(user_id: str | None, role: str, entity_type: str, out: str | None) -> None:
    """Export a whole collection as flat JSON records."""
    try:
        require_role(to_principal(user_id, role), Role.ADMIN)
        result = export_handler().handle(entity_type)
    except DatasetTooLarge as exc:
        click.echo(json.dumps(exc.to_payload(), indent=2), err=True)
        raise click.ClickException(str(exc))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    body = json.dumps(result.to_payload(), indent=2, default=str)
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(body)
        click.echo(result.message)
    else:
        click.echo(body)
