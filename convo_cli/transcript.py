"""Save finished conversations as timestamped JSON transcripts."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .errors import LogPersistError
from .loader import parse_records
from .models import Conversation

log = logging.getLogger("convo.transcript")

TRANSCRIPT_SUFFIX = ".log.json"


def transcript_dir(logs_dir: Path, model: str) -> Path:
    """Directory holding transcripts for ``model``, one path segment per model."""
    return logs_dir / model.replace("/", "_")


def format_timestamp(now: datetime) -> str:
    """RFC 3339 timestamp at seconds precision, e.g. ``2026-10-16T14:03:09+02:00``."""
    if now.tzinfo is None:
        now = now.astimezone()
    stamp = now.replace(microsecond=0).isoformat()
    if stamp.endswith("+00:00"):
        stamp = stamp[:-6] + "Z"
    return stamp


def save_transcript(
    conversation: Conversation,
    model: str,
    logs_dir: Path,
    now: Optional[datetime] = None,
) -> Path:
    """Write the conversation to ``<logs_dir>/<model>/<timestamp>.log.json``.
    
    Returns the path of the written file. Raises LogPersistError if the
    directory cannot be created or the file cannot be written.
    """
    target_dir = transcript_dir(logs_dir, model)
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise LogPersistError(f"Failed to create log directory: {e}") from e
    
    path = target_dir / f"{format_timestamp(now or datetime.now())}{TRANSCRIPT_SUFFIX}"
    content = json.dumps(conversation.to_openai_messages(), indent=2, ensure_ascii=False)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise LogPersistError(f"Failed to save conversation log file: {e}") from e
    
    log.info("Saved %d messages to %s", len(conversation), path)
    return path


def load_transcript(path: Path) -> Conversation:
    """Read a transcript written by save_transcript back into a conversation."""
    records = parse_records(path.read_bytes())
    return Conversation([record.to_message() for record in records])
