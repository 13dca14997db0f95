"""Error types for Convo CLI."""


class ConvoError(Exception):
    """Base class for all Convo CLI errors."""


class ConfigError(ConvoError):
    """Raised when required configuration is missing or invalid."""


class InvalidInputFormat(ConvoError):
    """Raised when the conversation seed file cannot be read or parsed."""


class PromptFileUnavailable(ConvoError):
    """Raised when a system prompt file cannot be opened or read."""
    
    def __init__(self, path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read system prompt file {path}: {reason}")


class ChatClientError(ConvoError):
    """A failed call to the chat-completion endpoint. Always recoverable."""


class TransportError(ChatClientError):
    """Raised when the request never got a response (refused, timeout, DNS)."""


class RemoteError(ChatClientError):
    """Raised when the endpoint answers with a non-200 status."""
    
    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status {status_code}")


class DecodeError(ChatClientError):
    """Raised when a 200 response body does not have the expected shape."""
    
    def __init__(self, body: str, reason: str) -> None:
        self.body = body
        self.reason = reason
        super().__init__(f"Could not decode response body: {reason}")


class LogPersistError(ConvoError):
    """Raised when the conversation transcript cannot be written."""
