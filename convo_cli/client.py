"""HTTP client for OpenAI-compatible chat-completion endpoints."""

import json
import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from pydantic import BaseModel, ValidationError

from .config import SessionConfig
from .errors import DecodeError, RemoteError, TransportError
from .models import Conversation, Message, MessageRole, Usage

log = logging.getLogger("convo.client")


class _ResponseMessage(BaseModel):
    role: Optional[str] = None
    content: Optional[str] = None


class _ResponseChoice(BaseModel):
    message: _ResponseMessage


class _ResponseBody(BaseModel):
    choices: Optional[list[_ResponseChoice]] = None
    usage: Optional[Usage] = None


@dataclass
class ChatReply:
    """Decoded result of one chat-completion call."""
    
    message: Optional[Message]
    usage: Usage
    raw: str
    
    @property
    def is_empty(self) -> bool:
        """True when the endpoint returned no choices."""
        return self.message is None


def build_payload(conversation: Conversation, model: str, temperature: float) -> dict:
    """Build the request body for a chat-completion call."""
    return {
        "model": model,
        "temperature": temperature,
        "messages": conversation.to_openai_messages(),
    }


def decode_reply(body: str) -> ChatReply:
    """Decode a 200 response body into a ChatReply.
    
    Only the first choice is used. Raises DecodeError if the body is not JSON
    or does not match the chat-completion response shape.
    """
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise DecodeError(body, str(e)) from e
    
    try:
        parsed = _ResponseBody.model_validate(data)
    except ValidationError as e:
        raise DecodeError(body, str(e)) from e
    
    message = None
    if parsed.choices:
        first = parsed.choices[0].message
        # Whatever role the endpoint reports, the reply is the assistant turn
        message = Message(role=MessageRole.ASSISTANT, content=first.content or "")
    return ChatReply(message=message, usage=parsed.usage or Usage(), raw=body)


class ChatClient:
    """Sends the running conversation to a chat-completion endpoint.
    
    The client makes exactly one attempt per call; retrying is left to the
    caller.
    """
    
    def __init__(self, config: SessionConfig, transport: Optional[httpx.BaseTransport] = None) -> None:
        self.config = config
        self.client = httpx.Client(
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
            },
            timeout=config.timeout,
            transport=transport,
        )
    
    def complete(self, conversation: Conversation, model: str, temperature: float) -> ChatReply:
        """Send the full conversation and return the assistant reply."""
        payload = build_payload(conversation, model, temperature)
        log.debug("POST %s (%d messages)", self.config.url, len(conversation))
        
        try:
            response = self.client.post(self.config.url, json=payload)
        except httpx.RequestError as e:
            raise TransportError(f"Error sending request: {e}") from e
        
        body = response.text
        if response.status_code != httpx.codes.OK:
            log.warning("API request failed with status %d: %s", response.status_code, body)
            raise RemoteError(response.status_code, body)
        
        log.debug("Received %d bytes", len(body))
        return decode_reply(body)
    
    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()
    
    def __enter__(self) -> "ChatClient":
        return self
    
    def __exit__(self, *exc_info) -> None:
        self.close()
