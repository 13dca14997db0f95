"""Data models for Convo CLI."""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Message roles in conversation."""
    
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """A single message in the conversation."""
    
    role: MessageRole
    content: str
    
    def __post_init__(self) -> None:
        # Coerce plain strings and reject anything outside the closed role set
        object.__setattr__(self, "role", MessageRole(self.role))
    
    def to_openai_format(self) -> dict[str, str]:
        """Convert to OpenAI API format."""
        return {"role": self.role.value, "content": self.content}


class MessageIn(BaseModel):
    """One entry of the conversation seed file.
    
    ``file`` names a prompt file relative to the prompts directory and only
    applies to system messages.
    """
    
    model_config = ConfigDict(extra="ignore", frozen=True)
    
    role: MessageRole
    content: Optional[str] = None
    file: Optional[str] = None
    
    def to_message(self) -> Message:
        """Convert to a conversation message using the inline content."""
        return Message(role=self.role, content=self.content or "")


class Usage(BaseModel):
    """Token usage reported by the endpoint for a single call."""
    
    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)


@dataclass
class Conversation:
    """An append-only, chronologically ordered list of messages."""
    
    messages: list[Message] = field(default_factory=list)
    
    def __len__(self) -> int:
        return len(self.messages)
    
    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)
    
    def append(self, message: Message) -> None:
        """Append a message at the end of the conversation."""
        self.messages.append(message)
    
    def add_message(self, role: MessageRole, content: str) -> Message:
        """Add a message to the conversation."""
        message = Message(role=role, content=content)
        self.append(message)
        return message
    
    @property
    def last(self) -> Optional[Message]:
        """The most recent message, or None for an empty conversation."""
        return self.messages[-1] if self.messages else None
    
    def count_by_role(self) -> dict[MessageRole, int]:
        """Count messages per role, including roles with no messages."""
        counts = Counter(msg.role for msg in self.messages)
        return {role: counts.get(role, 0) for role in MessageRole}
    
    def to_openai_messages(self) -> list[dict[str, str]]:
        """Convert all messages to OpenAI format."""
        return [msg.to_openai_format() for msg in self.messages]
