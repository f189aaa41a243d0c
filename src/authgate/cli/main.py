"""
authgate CLI — `authgate` command.

Commands:
  authgate auth register                 Create an account
  authgate auth login                    Log in and confirm the session
  authgate auth verify-email <token>     Complete email verification
  authgate auth resend-verification <email>

Nothing is persisted between invocations; the session cookie lives only
for the duration of one command.
"""

import asyncio

try:
    import click
    from rich.console import Console
except ImportError:
    raise SystemExit("CLI requires extras: pip install authgate[cli]")

from authgate.client import AsyncAuthGate
from authgate.transport.http import DEFAULT_BASE_URL

console = Console()


def _get_client(ctx: click.Context) -> AsyncAuthGate:
    return AsyncAuthGate(base_url=ctx.obj["base_url"])


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option("0.1.0")
@click.option("--base-url", envvar="AUTHGATE_API_URL", default=DEFAULT_BASE_URL, show_default=True,
              help="Auth service base URL")
@click.pass_context
def main(ctx: click.Context, base_url: str):
    """authgate CLI — talk to the session-cookie auth service."""
    ctx.ensure_object(dict)
    ctx.obj["base_url"] = base_url


# Register subcommands from separate modules
from authgate.cli.auth import auth

main.add_command(auth)


if __name__ == "__main__":
    main()
