import click

from miniorder.infrastructure.cli.order_commands import orders_pending, orders_process


@click.group()
@click.option("--order-service-url", default=None, help="Order service base URL.")
@click.option("--shipping-service-url", default=None, help="Shipping service base URL.")
@click.option(
    "--labels-dir",
    default=None,
    type=click.Path(file_okay=False),
    help="Directory that receives the label files.",
)
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.pass_context
def cli(
    ctx: click.Context,
    order_service_url: str | None,
    shipping_service_url: str | None,
    labels_dir: str | None,
    log_level: str | None,
) -> None:
    """MiniOrder: fulfill pending orders with shipping labels."""
    # Settings are resolved by each command so --help works unconfigured
    ctx.obj = {
        "order_service_url": order_service_url,
        "shipping_service_url": shipping_service_url,
        "labels_dir": labels_dir,
        "log_level": log_level,
    }


# Register subcommands
cli.add_command(orders_pending)
cli.add_command(orders_process)
