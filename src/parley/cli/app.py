"""Main CLI application using Typer."""
import asyncio

import typer
from rich.console import Console

from ..client import ChatClient
from ..logs import configure_logging
from ..session import SessionArchive, SubmitOutcome
from .formatting import render_message, render_sessions
from .providers import get_client, get_config, get_storage

# Create Typer app
app = typer.Typer(
    name="parley",
    help="Terminal chat client with archived conversation sessions",
    no_args_is_help=True,
    add_completion=True,
)
sessions_app = typer.Typer(help="Inspect and manage archived sessions", no_args_is_help=True)
app.add_typer(sessions_app, name="sessions")

# Console for rich output
console = Console()

HELP_TEXT = (
    "[dim]Commands: /new start a new chat, /sessions list archived chats, "
    "/open N restore chat N, /delete N delete chat N, /quit exit[/dim]"
)


def _parse_index(arg: str, count: int) -> int | None:
    """Turn a 1-based index argument into a 0-based one."""
    try:
        number = int(arg)
    except ValueError:
        return None
    if 1 <= number <= count:
        return number - 1
    return None


async def handle_command(client: ChatClient, line: str, out: Console) -> bool:
    """Run one slash command. Returns False when the loop should stop."""
    command, _, arg = line.strip().partition(" ")
    command = command.lower()

    if command in ("/quit", "/exit"):
        return False

    if command == "/new":
        archived = await client.new_chat()
        out.print("[green]Started a new chat[/green]" + (" (previous chat archived)" if archived else ""))
    elif command == "/sessions":
        if client.sessions:
            out.print(render_sessions(client.sessions))
        else:
            out.print("[yellow]No archived sessions[/yellow]")
    elif command in ("/open", "/delete"):
        index = _parse_index(arg, len(client.sessions))
        if index is None:
            out.print(f"[red]Usage: {command} N (1-{len(client.sessions)})[/red]")
        elif command == "/open":
            session = await client.open_session(index)
            out.rule(session.title)
            for message in client.messages:
                out.print(render_message(message))
        else:
            session = await client.delete_session(index)
            out.print(f"[green]Deleted session:[/green] {session.title}")
    else:
        out.print(HELP_TEXT)
    return True


async def handle_prompt(client: ChatClient, prompt: str, out: Console) -> None:
    """Submit one prompt and render the outcome."""
    with out.status("Typing..."):
        client.orchestrator.draft = prompt
        result = await client.submit()

    if result.outcome == SubmitOutcome.FULFILLED:
        if result.appended:
            out.print(render_message(client.messages[-1]))
    elif result.outcome == SubmitOutcome.LIMIT_REACHED:
        out.print(f"[yellow]{result.notice}[/yellow]")
    elif result.outcome == SubmitOutcome.UNAUTHENTICATED:
        out.print("[red]Not logged in. Start the chat with --user.[/red]")
    elif result.outcome == SubmitOutcome.FAILED:
        out.print("[dim red]No reply received.[/dim red]")


async def run_chat(client: ChatClient, user: str, out: Console) -> None:
    """Interactive loop: render history, then read prompts until /quit."""
    await client.login(user)
    for message in client.messages:
        out.print(render_message(message))
    out.print(HELP_TEXT)

    while True:
        try:
            line = await asyncio.to_thread(out.input, "[bold blue]You[/bold blue] > ")
        except (EOFError, KeyboardInterrupt):
            break

        if line.strip().startswith("/"):
            if not await handle_command(client, line, out):
                break
            continue

        await handle_prompt(client, line, out)


@app.command()
def chat(
    user: str = typer.Option(..., "--user", "-u", help="Name of the logged-in user"),
    log_level: str | None = typer.Option(None, "--log-level", help="Override PARLEY_LOG_LEVEL"),
):
    """Start an interactive chat session."""
    config = get_config(log_level=log_level)
    configure_logging(config.log_level)

    async def _chat():
        client = get_client(config, console)
        async with client:
            await run_chat(client, user, console)

    asyncio.run(_chat())


@sessions_app.command("list")
def list_sessions():
    """List archived sessions."""
    config = get_config()
    configure_logging(config.log_level)

    async def _list():
        storage = get_storage(config)
        try:
            await storage.connect()
            archive = SessionArchive(storage)
            await archive.load()

            if not archive.sessions:
                console.print("[yellow]No archived sessions[/yellow]")
                return
            console.print(render_sessions(archive.sessions))
        finally:
            await storage.disconnect()

    asyncio.run(_list())


@sessions_app.command("show")
def show_session(
    number: int = typer.Argument(..., min=1, help="Session number from 'sessions list'"),
):
    """Print the transcript of one archived session."""
    config = get_config()
    configure_logging(config.log_level)

    async def _show():
        storage = get_storage(config)
        try:
            await storage.connect()
            archive = SessionArchive(storage)
            await archive.load()

            if number > len(archive):
                console.print(f"[red]Error: no session {number} ({len(archive)} archived)[/red]")
                raise typer.Exit(code=1)

            session = archive[number - 1]
            console.rule(session.title)
            for message in session.messages:
                console.print(render_message(message))
        finally:
            await storage.disconnect()

    asyncio.run(_show())


@sessions_app.command("clear")
def clear_sessions(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete every archived session."""
    config = get_config()
    configure_logging(config.log_level)

    if not yes and not typer.confirm("Delete all archived sessions?"):
        console.print("[dim]Aborted.[/dim]")
        return

    async def _clear():
        storage = get_storage(config)
        try:
            await storage.connect()
            archive = SessionArchive(storage)
            await archive.load()
            count = len(archive)
            await archive.replace_all([])
            console.print(f"[green]Deleted {count} sessions[/green]")
        finally:
            await storage.disconnect()

    asyncio.run(_clear())


if __name__ == "__main__":
    app()
