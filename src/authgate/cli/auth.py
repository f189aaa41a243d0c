"""CLI: authgate auth register|login|verify-email|resend-verification"""

import asyncio

import httpx
import click
from rich.console import Console

from authgate.errors import ClassifiedError
from authgate.models.user import LoginRequest, RegisterRequest, User
from authgate.models.verification import VerificationState, VerificationStatus

console = Console()

STATE_STYLES = {
    VerificationStatus.VERIFYING: "cyan",
    VerificationStatus.SUCCESS: "green",
    VerificationStatus.ERROR: "red",
}


def _get_client(ctx: click.Context):
    from authgate.cli.main import _get_client
    return _get_client(ctx)


def _run(coro):
    from authgate.cli.main import _run
    return _run(coro)


def _call(ctx: click.Context, action):
    """Run one client action, rendering classified and transport errors."""

    async def _go():
        client = _get_client(ctx)
        try:
            return await action(client)
        finally:
            await client.close()

    try:
        return _run(_go())
    except ClassifiedError as e:
        console.print(f"[red]{e.user_message}[/red]")
        raise SystemExit(1)
    except httpx.TransportError:
        console.print(f"[red]Could not reach the auth service at {ctx.obj['base_url']}.[/red]")
        raise SystemExit(1)


def _describe(user: User) -> str:
    return f"{user.email or user.username or 'unknown'} (ID: {user.id})"


@click.group()
def auth():
    """Authentication commands."""


@auth.command("register")
@click.pass_context
def auth_register(ctx: click.Context):
    """Create a new account."""
    data = RegisterRequest(
        email=click.prompt("Email"),
        username=click.prompt("Username"),
        password=click.prompt("Password", hide_input=True, confirmation_prompt=True),
    )

    async def _register(client):
        with console.status("Registering..."):
            return await client.auth.register(data)

    user = _call(ctx, _register)
    console.print(f"[green]Registered {_describe(user)}. Check your inbox to verify your email.[/green]")


@auth.command("login")
@click.pass_context
def auth_login(ctx: click.Context):
    """Log in and confirm the session cookie is accepted."""
    data = LoginRequest(email=click.prompt("Email"), password=click.prompt("Password", hide_input=True))

    async def _login(client):
        with console.status("Logging in..."):
            await client.auth.login(data)
        with console.status("Checking session..."):
            return await client.auth.get_current_user()

    user = _call(ctx, _login)
    console.print(f"[green]Logged in as {_describe(user)}[/green]")


@auth.command("verify-email")
@click.argument("token", required=False, default="")
@click.option("--redirect-delay", default=0.0, type=float, show_default=True,
              help="Seconds to wait before following the success redirect")
@click.pass_context
def auth_verify_email(ctx: click.Context, token: str, redirect_delay: float):
    """Complete email verification with the token from the emailed link."""

    def render(state: VerificationState) -> None:
        if state.message:
            style = STATE_STYLES[state.status]
            console.print(f"[{style}]{state.message}[/{style}]")

    async def _verify(client):
        redirected = asyncio.Event()

        def navigate(path: str) -> None:
            console.print(f"[dim]-> {path}[/dim]")
            redirected.set()

        flow = client.verification(navigate, on_change=render, redirect_delay=redirect_delay)
        with console.status("Verifying email..."):
            state = await flow.run(token)
        if state.status is VerificationStatus.SUCCESS:
            await redirected.wait()
        flow.teardown()
        return state

    state = _call(ctx, _verify)
    if state.status is VerificationStatus.ERROR:
        raise SystemExit(1)


@auth.command("resend-verification")
@click.argument("email")
@click.pass_context
def auth_resend_verification(ctx: click.Context, email: str):
    """Send the verification email again."""

    async def _resend(client):
        with console.status("Sending..."):
            await client.auth.resend_verification(email)

    _call(ctx, _resend)
    console.print("[green]Verification email sent. Check your inbox.[/green]")
