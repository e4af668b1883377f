"""Terminal rendering of transcripts and archived sessions."""

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..transcript import Message, Session

TIME_FORMAT = "%H:%M:%S"


def render_message(message: Message) -> Panel:
    """Render one message as a bubble: user right-aligned, bot left."""
    stamp = message.timestamp.astimezone().strftime(TIME_FORMAT)
    body = Group(Text(message.text), Text(stamp, style="dim"))
    if message.is_user:
        return Panel(body, title="You", title_align="right", border_style="blue", expand=False)
    return Panel(body, title="Bot", title_align="left", border_style="grey50", expand=False)


def render_sessions(sessions: tuple[Session, ...]) -> Table:
    """Render the archive as a numbered table."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="cyan")
    table.add_column("Messages", width=8)
    table.add_column("Started", style="dim")

    for i, session in enumerate(sessions, 1):
        started = session.started_at
        table.add_row(
            str(i),
            session.title,
            str(len(session)),
            started.astimezone().strftime("%Y-%m-%d %H:%M") if started else "-",
        )
    return table
