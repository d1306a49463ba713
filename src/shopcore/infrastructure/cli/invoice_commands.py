"""CLI commands for invoice documents."""

from __future__ import annotations

from pathlib import Path

import click

from shopcore.domain.exceptions import DomainException
from shopcore.infrastructure.bootstrap import invoice_handler
from shopcore.infrastructure.cli.options import principal_options, to_principal


@click.command("generate")
@principal_options
@click.option("--id", "order_id", required=True, help="Order id.")
@click.option(
    "--out",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Directory for the PDF.",
)
def invoice_generate(user_id: str | None, role: str, order_id: str, out: Path) -> None:
    """Render the PDF invoice for an order."""
    try:
        document = invoice_handler().handle(order_id, principal=to_principal(user_id, role))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    out.mkdir(parents=True, exist_ok=True)
    target = out / document.filename
    target.write_bytes(document.content)

    click.echo(f"Wrote {target} ({document.size} bytes)")
    if document.degraded:
        click.echo("Warning: full invoice could not be rendered; a minimal document was written.", err=True)
