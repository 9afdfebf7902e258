"""Main CLI application using Cyclopts.

Server-side commands (serve, seed, token) work on the local configuration;
client-side commands (status, admin) talk to a running server over HTTP.
"""

import cyclopts

from rolegate.cli.commands import admin, seed, serve, status, token

app = cyclopts.App(
    name="rolegate",
    help="RoleGate - role and approval gated access",
)

app.command(serve.serve, name="serve")
app.command(seed.seed, name="seed")
app.command(token.token, name="token")
app.command(status.status, name="status")
app.command(admin.app, name="admin")
