"""CLI commands for listing and fulfilling pending orders."""

from __future__ import annotations

import click

from miniorder.application.dto import OrderOutcomeDTO, PendingOrderDTO
from miniorder.domain.exceptions import DomainException
from miniorder.domain.model.fulfillment import OrderFulfillment
from miniorder.domain.model.order import OrderSummary
from miniorder.infrastructure.bootstrap import ServiceCollection, configure_services
from miniorder.infrastructure.config import ConfigurationError, Settings
from miniorder.infrastructure.log_config import configure_logging

_RULE = "#" * 70


def _services(ctx: click.Context) -> ServiceCollection:
    """Resolve settings from the group options and build the services."""
    try:
        settings = Settings.from_env(**(ctx.obj or {}))
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))

    configure_logging(settings.log_level)
    return configure_services(settings)


def _list_pending(services: ServiceCollection) -> list[OrderSummary]:
    click.echo("Getting the pending orders......")
    try:
        summaries = services.lister.list_pending()
    except DomainException as exc:
        raise click.ClickException(f"Could not list pending orders: {exc}")

    for summary in summaries:
        dto = PendingOrderDTO.from_summary(summary)
        click.echo(f"  #{dto.order_id:<6} {dto.customer_name:<30} {dto.order_date}")
    click.echo(f"There are {len(summaries)} pending orders")
    return summaries


def _display_outcome(fulfillment: OrderFulfillment) -> None:
    """Shared formatting for one processed order."""
    dto = OrderOutcomeDTO.from_fulfillment(fulfillment)

    click.echo(_RULE)
    click.echo(f"Order #{dto.order_id}  (status={dto.status})")
    click.echo(f"Customer Name: {dto.customer_name}")
    click.echo(f"Order Date:    {dto.order_date}")

    if dto.items:
        click.echo()
        click.echo(f"  {'Product':<30} {'Price':>10}")
        click.echo(f"  {'-'*41}")
        for item in dto.items:
            click.echo(f"  {item.product_name:<30} {item.unit_price:>10}")
            if item.product_description:
                click.echo(f"    {item.product_description}")
        click.echo(f"  {'-'*41}")
    if dto.total is not None:
        click.echo(f"  {'Order Total':<30} {dto.total:>10}")

    click.echo()
    if dto.error is None:
        click.echo(f"Label printed for tracking number {dto.tracking_number}.")
        click.echo(
            f"{dto.confirmation} The new tracking number for this order is "
            f"{dto.tracking_number}"
        )
    else:
        click.echo(f"FAILED at stage '{dto.failed_stage}': {dto.error}", err=True)
    click.echo(_RULE)


@click.command("pending")
@click.pass_context
def orders_pending(ctx: click.Context) -> None:
    """List the orders waiting to be fulfilled."""
    services = _services(ctx)
    _list_pending(services)


@click.command("process")
@click.option(
    "--count",
    type=int,
    default=None,
    help="Number of pending orders to process (prompted for if omitted).",
)
@click.option(
    "--continue-on-error",
    is_flag=True,
    default=False,
    help="Move on to the next order after a failure instead of halting.",
)
@click.pass_context
def orders_process(ctx: click.Context, count: int | None, continue_on_error: bool) -> None:
    """Print labels for pending orders and publish their tracking numbers.

    Orders are processed one by one, in the order the Order service lists
    them. By default the batch halts at the first failed order.
    """
    services = _services(ctx)
    summaries = _list_pending(services)

    if count is None:
        count = click.prompt(
            "How many orders should we process?",
            type=click.IntRange(0, len(summaries)),
        )

    click.echo()
    click.echo("Processing orders....")
    try:
        report = services.pipeline.run(
            summaries,
            count,
            continue_on_error=continue_on_error,
            on_order_done=_display_outcome,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo()
    click.echo(
        f"Processed {report.processed_count} order(s): "
        f"{len(report.succeeded)} fulfilled, {len(report.failed)} failed, "
        f"{len(report.not_attempted)} not attempted."
    )
    for failed in report.failed:
        click.echo(
            f"  Order #{failed.order_id} failed at '{failed.failed_stage_name}': "
            f"{failed.error}",
            err=True,
        )
    if report.not_attempted:
        skipped = ", ".join(f"#{s.order_id}" for s in report.not_attempted)
        click.echo(f"  Not attempted: {skipped}", err=True)

    if not report.all_succeeded:
        ctx.exit(1)
