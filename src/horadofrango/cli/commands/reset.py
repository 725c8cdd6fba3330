"""Reset command."""

import click


@click.command("reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset(ctx, yes: bool):
    """Erase all data and restore the default banks and categories.

    This cannot be undone.
    """
    store = ctx.obj["store"]

    if not yes and not click.confirm(
        "This erases every transaction, fiado and month history. Continue?"
    ):
        click.echo("Reset cancelled.")
        return

    store.reset_all_data()
    click.echo("All data erased. Default banks and categories restored.")


def register_commands(cli):
    """Register reset command with main CLI."""
    cli.add_command(reset)
