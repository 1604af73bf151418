"""Interactive command line front end for the room sensor log."""

# The Typer application lives in ``cli.app``; it is not re-exported here so
# that ``cli.app`` keeps resolving to the module (tests patch attributes on it).

__all__: list[str] = []
