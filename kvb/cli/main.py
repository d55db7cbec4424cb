"""Main CLI application using Cyclopts.

``kvb server`` runs the REST API; the other commands are thin HTTP clients
of a running server.
"""

import cyclopts

from kvb.cli.commands import keys, server

app = cyclopts.App(
    name="kvb",
    help="Key-value browser - CLI",
)

app.command(server.app, name="server")
app.command(keys.app, name="keys")
