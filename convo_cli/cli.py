"""Main CLI entry point for Convo CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __app_name__, __version__
from .client import ChatClient
from .config import (
    DEFAULT_INPUT_DIR,
    DEFAULT_INPUT_FILE,
    DEFAULT_LOGS_DIR,
    DEFAULT_PROMPTS_DIR,
    build_config,
)
from .errors import ConfigError, InvalidInputFormat, PromptFileUnavailable
from .loader import load_conversation
from .logging_setup import setup_logging
from .session import ChatSession

# Rich console for beautiful output
console = Console()

app = typer.Typer(
    name=__app_name__,
    help="Chat with an OpenAI-compatible model from your terminal",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")
        raise typer.Exit()


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)
    raise typer.Exit(1)


@app.command()
def chat(
    api_key: Optional[str] = typer.Option(
        None, "--api-key", help="LLM provider API key [env: LLM_PROVIDER_KEY]"
    ),
    model: Optional[str] = typer.Option(
        None, "--model", "-m", help="LLM model name [env: LLM_MODEL]"
    ),
    url: Optional[str] = typer.Option(
        None, "--url", help="Chat completion URL [env: CHAT_COMPLETION_URL]"
    ),
    temperature: Optional[str] = typer.Option(
        None, "--temperature", "-t", help="Temperature for the LLM [env: TEMPERATURE]"
    ),
    input_file: str = typer.Option(
        DEFAULT_INPUT_FILE, "--input", "-i", help="Path to the input messages file"
    ),
    input_dir: Path = typer.Option(
        Path(DEFAULT_INPUT_DIR), "--input-dir", help="Directory for input files"
    ),
    prompts_dir: Path = typer.Option(
        Path(DEFAULT_PROMPTS_DIR), "--prompts-dir", help="Directory for prompt files"
    ),
    logs_dir: Path = typer.Option(
        Path(DEFAULT_LOGS_DIR), "--logs-dir", help="Directory for log files"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Request timeout in seconds [env: CHAT_TIMEOUT]"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version information."
    ),
) -> None:
    """Load a conversation and continue it interactively.
    
    Type /quit to save the conversation and exit, /quit! to exit without saving.
    """
    setup_logging(verbose)
    
    try:
        cfg = build_config(
            api_key=api_key,
            model=model,
            url=url,
            temperature=temperature,
            input_file=input_file,
            input_dir=input_dir,
            prompts_dir=prompts_dir,
            logs_dir=logs_dir,
            timeout=timeout,
        )
    except ConfigError as e:
        _fail(f"Failed to load configuration: {e}")
    
    try:
        conversation = load_conversation(cfg.input_path, cfg.prompts_dir)
    except (InvalidInputFormat, PromptFileUnavailable) as e:
        _fail(str(e))
    
    with ChatClient(cfg) as client:
        ChatSession(cfg, conversation, client, console).run()


def run() -> None:
    """Entry point for the CLI."""
    app()
