"""Provider factory functions for CLI.

Centralizes creation of the chat client and local storage from
environment variables. Hides configuration details from command
implementations.
"""

from rich.console import Console

from ..client import ChatClient
from ..config import ClientConfig
from ..storage import LocalStorage, create_local_storage

# Default console for output
_console = Console()


def get_config(**overrides) -> ClientConfig:
    """Read client configuration from the environment and ``.env``."""
    return ClientConfig.from_env(**overrides)


def get_storage(config: ClientConfig) -> LocalStorage:
    """Create the local storage backend holding the session archive."""
    kwargs = {}
    if config.resolved_storage_path is not None:
        kwargs["path"] = config.resolved_storage_path
    return create_local_storage(config.storage_backend, **kwargs)


def get_client(config: ClientConfig, console: Console | None = None) -> ChatClient:
    """Create a chat client from configuration.

    Raises:
        SystemExit: If GEMINI_API_KEY is not set
    """
    import typer

    con = console or _console
    if not config.api_key:
        con.print("[red]Error: GEMINI_API_KEY not set in environment[/red]")
        raise typer.Exit(code=1)

    return ChatClient.from_config(config)
