"""Interactive chat session: the turn-taking loop."""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from . import display
from .client import ChatClient
from .config import SessionConfig
from .errors import ChatClientError, LogPersistError
from .models import Conversation, MessageRole
from .transcript import save_transcript

log = logging.getLogger("convo.session")


class SessionState(str, Enum):
    """States of the chat loop."""

    AWAITING_USER_TURN = "awaiting_user_turn"
    AWAITING_REMOTE_REPLY = "awaiting_remote_reply"
    TERMINATED = "terminated"


@dataclass
class SessionOutcome:
    """How a session ended."""

    saved: bool = False
    transcript_path: Optional[Path] = None


def initial_state(conversation: Conversation) -> SessionState:
    """Pick the first action: answer a trailing user message, otherwise prompt."""
    last = conversation.last
    if last is not None and last.role == MessageRole.USER:
        return SessionState.AWAITING_REMOTE_REPLY
    return SessionState.AWAITING_USER_TURN


class ChatSession:
    """Drives one conversation from the loaded seed to a quit command.

    The session is the only writer of the conversation. Failed remote calls
    leave it untouched and are retried straight away; only ``/quit`` or
    ``/quit!`` at the prompt ends the loop.
    """

    def __init__(
        self,
        config: SessionConfig,
        conversation: Conversation,
        client: ChatClient,
        console: Console,
        read_line: Optional[Callable[[str], str]] = None,
        save: Callable[..., Path] = save_transcript,
    ) -> None:
        self.config = config
        self.conversation = conversation
        self.client = client
        self.console = console
        self.read_line = read_line or console.input
        self.save = save
        self.state = initial_state(conversation)
        self.outcome = SessionOutcome()

    def run(self) -> SessionOutcome:
        """Show the banner and loop until the session terminates."""
        display.show_banner(
            self.console, self.conversation, self.config.model, self.config.temperature
        )
        while self.state != SessionState.TERMINATED:
            self.step()
        return self.outcome

    def step(self) -> SessionState:
        """Perform a single state transition and return the new state."""
        if self.state == SessionState.AWAITING_USER_TURN:
            self._await_user_turn()
        elif self.state == SessionState.AWAITING_REMOTE_REPLY:
            self._await_remote_reply()
        return self.state

    def _read_user_input(self) -> Optional[str]:
        """Read one line, or None when input is exhausted or interrupted."""
        try:
            line = self.read_line(display.USER_PROMPT)
        except EOFError:
            log.warning("End of input reached, exiting without saving")
            return None
        except KeyboardInterrupt:
            self.console.print("\n[dim]Interrupted.[/dim]")
            return None
        return line.rstrip("\r\n")

    def _await_user_turn(self) -> None:
        user_input = self._read_user_input()

        if user_input is None or user_input == display.QUIT_NO_SAVE_COMMAND:
            self._terminate(save=False)
        elif user_input == display.QUIT_COMMAND:
            self._terminate(save=True)
        else:
            self.conversation.add_message(MessageRole.USER, user_input)
            self.state = SessionState.AWAITING_REMOTE_REPLY

    def _await_remote_reply(self) -> None:
        try:
            reply = self.client.complete(
                self.conversation, self.config.model, self.config.temperature
            )
        except ChatClientError as e:
            # Same state: the next step sends the unchanged conversation again
            log.warning("Remote call failed: %s", e)
            display.show_client_error(self.console, e)
            return
        except KeyboardInterrupt:
            self.console.print("\n[dim]Request cancelled.[/dim]")
            display.show_quit_hints(self.console)
            self.state = SessionState.AWAITING_USER_TURN
            return

        if reply.is_empty:
            display.show_empty_reply(self.console, reply.raw)
        else:
            self.conversation.append(reply.message)
            display.show_reply(self.console, reply.message, reply.usage)
        self.state = SessionState.AWAITING_USER_TURN

    def _terminate(self, save: bool) -> None:
        self.state = SessionState.TERMINATED
        if not save:
            return

        try:
            path = self.save(self.conversation, self.config.model, self.config.logs_dir)
        except LogPersistError as e:
            log.error("Error saving conversation log: %s", e)
            self.console.print(f"[red]Error saving conversation log:[/red] {escape(str(e))}", highlight=False)
            return

        self.outcome = SessionOutcome(saved=True, transcript_path=path)
        self.console.print(f"Conversation saved to [cyan]{escape(str(path))}[/cyan]", highlight=False)
