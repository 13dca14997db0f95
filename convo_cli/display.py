"""Terminal rendering for chat sessions."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .errors import ChatClientError, DecodeError, RemoteError
from .models import Conversation, Message, MessageRole, Usage

QUIT_COMMAND = "/quit"
QUIT_NO_SAVE_COMMAND = "/quit!"

USER_PROMPT = ">> "
REPLY_PREFIX = "<< "


def show_banner(console: Console, conversation: Conversation, model: str, temperature: float) -> None:
    """Show the model, temperature, context counts and quit commands."""
    counts = conversation.count_by_role()

    table = Table.grid(padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(justify="right", style="cyan")
    table.add_row("Temperature:", f"{temperature:.2f}")
    table.add_row("", "")
    table.add_row("[bold]Context Messages Count:[/bold]", "")
    table.add_row("  System:", f"{counts[MessageRole.SYSTEM]:3d}")
    table.add_row("  User:", f"{counts[MessageRole.USER]:3d}")
    table.add_row("  Assistant:", f"{counts[MessageRole.ASSISTANT]:3d}")

    console.print(Panel.fit(
        Text.assemble(
            ("You are now chatting with the model:\n\n", "bold blue"),
            ("> ", "dim"),
            (model, "bold cyan"),
        ),
        border_style="blue",
    ))
    console.print(Panel.fit(table, border_style="blue"))
    show_quit_hints(console)
    console.print()


def show_quit_hints(console: Console) -> None:
    """Show the two quit commands."""
    console.print(
        f"[yellow]{USER_PROMPT}{QUIT_COMMAND}[/yellow]     to save conversation and exit\n"
        f"[yellow]{USER_PROMPT}{QUIT_NO_SAVE_COMMAND}[/yellow]    to exit without saving",
        highlight=False,
    )


def show_reply(console: Console, message: Message, usage: Usage) -> None:
    """Show an assistant reply followed by its token usage."""
    console.print(Text(REPLY_PREFIX + message.content))
    console.print()
    console.print(
        Text(
            f"[Input: {usage.prompt_tokens} tokens, Output: {usage.completion_tokens} tokens]",
            style="dim",
        )
    )
    console.print()


def show_empty_reply(console: Console, raw: str) -> None:
    """Show the raw body of a response that carried no choices."""
    console.print("[red]!! Error: No response from API[/red]\n")
    console.print(Text(raw))
    console.print()
    show_quit_hints(console)
    console.print()


def show_client_error(console: Console, error: ChatClientError) -> None:
    """Show a failed remote call inline. The session keeps going."""
    if isinstance(error, RemoteError):
        console.print(f"[red]!! API Error ({error.status_code}):[/red] ", end="")
        console.print(Text(error.body))
    elif isinstance(error, DecodeError):
        console.print(f"[red]!! Error:[/red] {escape(str(error))}", highlight=False)
        console.print(Text("Raw response: " + error.body))
    else:
        console.print(f"[red]!! Error:[/red] {escape(str(error))}", highlight=False)
    console.print("[dim]Retrying...[/dim]")
