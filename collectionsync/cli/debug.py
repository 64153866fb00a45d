import click

from .utils.logging import configure_logging


def _set_debug(ctx, param, value: bool):
    """Enable debug output from any command level; only the root can disable it."""
    root_ctx = ctx.find_root()
    root_ctx.ensure_object(dict)
    if value or ctx is root_ctx or "DEBUG" not in root_ctx.obj:
        root_ctx.obj["DEBUG"] = bool(value)
    configure_logging(root_ctx.obj["DEBUG"])
    return root_ctx.obj["DEBUG"]


def add_debug_option(cmd):
    """Add ``--debug/--no-debug`` to a click command or to a function about to become one."""
    if isinstance(cmd, click.Command):
        if not any(param.name == "debug" for param in cmd.params):
            cmd.params.insert(
                0,
                click.Option(
                    ["--debug/--no-debug"],
                    is_eager=True,
                    expose_value=False,
                    callback=_set_debug,
                    help="Enable debug mode",
                ),
            )
        return cmd

    return click.option(
        "--debug/--no-debug",
        is_eager=True,
        expose_value=False,
        callback=_set_debug,
        help="Enable debug mode",
    )(cmd)
