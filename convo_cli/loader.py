"""Load the initial conversation from a JSON seed file."""

import json
import logging
from pathlib import Path
from typing import Iterable, Union

from pydantic import TypeAdapter, ValidationError

from .errors import InvalidInputFormat, PromptFileUnavailable
from .models import Conversation, Message, MessageIn, MessageRole

log = logging.getLogger("convo.loader")

_RECORDS = TypeAdapter(list[MessageIn])


def parse_records(data: Union[str, bytes]) -> list[MessageIn]:
    """Decode a JSON array of message records.
    
    Raises InvalidInputFormat if the data is not valid JSON, is not an array,
    or contains an element that does not match the record shape.
    """
    try:
        raw = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidInputFormat(f"Invalid JSON input: {e}") from e
    
    if not isinstance(raw, list):
        raise InvalidInputFormat(
            f"Invalid JSON input: expected an array of messages, got {type(raw).__name__}"
        )
    
    try:
        return _RECORDS.validate_python(raw)
    except ValidationError as e:
        raise InvalidInputFormat(f"Invalid message record: {e}") from e


def read_prompt_file(prompts_dir: Path, name: str) -> str:
    """Read a system prompt file in full."""
    path = prompts_dir / name
    try:
        # Bytes as-is: no newline translation
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise PromptFileUnavailable(path, str(e)) from e


def resolve_records(records: Iterable[MessageIn], prompts_dir: Path) -> Conversation:
    """Turn raw records into a conversation, one message per record.
    
    System records with a ``file`` take their content from that prompt file
    instead of the inline text.
    """
    conversation = Conversation()
    for record in records:
        message = record.to_message()
        if record.role == MessageRole.SYSTEM and record.file:
            content = read_prompt_file(prompts_dir, record.file)
            log.debug("Loaded system prompt %s (%d chars)", record.file, len(content))
            message = Message(role=MessageRole.SYSTEM, content=content)
        conversation.append(message)
    return conversation


def load_conversation(input_path: Path, prompts_dir: Path) -> Conversation:
    """Read the seed file at ``input_path`` and build the starting conversation."""
    try:
        data = input_path.read_bytes()
    except OSError as e:
        raise InvalidInputFormat(f"Failed to open input file {input_path}: {e}") from e
    
    conversation = resolve_records(parse_records(data), prompts_dir)
    log.debug("Loaded %d messages from %s", len(conversation), input_path)
    return conversation
