"""Index command: serpentine strip index lookup."""

import click

from ledbridge.matrix import INVALID_INDEX, MatrixMapper


@click.command(name="index")
@click.argument("x", type=int)
@click.argument("y", type=int)
@click.pass_context
def index(ctx, x: int, y: int):
    """Print the LED strip index of physical pixel X Y."""
    config = ctx.obj["config"]
    mapper = MatrixMapper(
        width=config.matrix_width,
        height=config.matrix_height,
        grid_width=config.grid_width,
        grid_height=config.grid_height,
    )

    strip_index = mapper.xy_to_index(x, y)
    if strip_index == INVALID_INDEX:
        click.echo(f"({x}, {y}) is not on the {mapper.width}x{mapper.height} matrix")
        ctx.exit(1)

    role = "primary" if mapper.is_primary(x, y) else "secondary"
    click.echo(f"({x}, {y}) -> {strip_index} [{role}]")
