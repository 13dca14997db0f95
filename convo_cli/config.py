"""Configuration management for Convo CLI."""

import logging
import math
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError

log = logging.getLogger("convo.config")

DEFAULT_TEMPERATURE = 0.0
DEFAULT_TIMEOUT = 120.0
DEFAULT_INPUT_FILE = "messages.json"
DEFAULT_INPUT_DIR = "input"
DEFAULT_PROMPTS_DIR = "prompts"
DEFAULT_LOGS_DIR = "logs"


class EnvSettings(BaseSettings):
    """Values picked up from the environment and an optional ``.env`` file."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    api_key: Optional[str] = Field(default=None, validation_alias="LLM_PROVIDER_KEY")
    model: Optional[str] = Field(default=None, validation_alias="LLM_MODEL")
    url: Optional[str] = Field(default=None, validation_alias="CHAT_COMPLETION_URL")
    # Kept as text so a bad value degrades to the default instead of failing
    temperature: Optional[str] = Field(default=None, validation_alias="TEMPERATURE")
    timeout: Optional[float] = Field(default=None, validation_alias="CHAT_TIMEOUT")


class SessionConfig(BaseModel):
    """Validated settings for one run. Immutable once built."""
    
    model_config = ConfigDict(frozen=True)
    
    api_key: str
    model: str
    url: str
    temperature: float = Field(default=DEFAULT_TEMPERATURE, allow_inf_nan=False)
    input_file: str = DEFAULT_INPUT_FILE
    input_dir: Path = Path(DEFAULT_INPUT_DIR)
    prompts_dir: Path = Path(DEFAULT_PROMPTS_DIR)
    logs_dir: Path = Path(DEFAULT_LOGS_DIR)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    
    @property
    def input_path(self) -> Path:
        """Full path of the conversation seed file."""
        return self.input_dir / self.input_file


def parse_temperature(value: Optional[str]) -> float:
    """Parse a temperature string, falling back to the default on bad input."""
    try:
        temperature = float(value)
    except (TypeError, ValueError):
        temperature = None
    
    if temperature is None or not math.isfinite(temperature):
        log.warning(
            'Failed to parse temperature value "%s". Using default value instead: %s',
            value if value is not None else "",
            DEFAULT_TEMPERATURE,
        )
        return DEFAULT_TEMPERATURE
    return temperature


def build_config(
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    url: Optional[str] = None,
    temperature: Optional[str] = None,
    input_file: str = DEFAULT_INPUT_FILE,
    input_dir: Path = Path(DEFAULT_INPUT_DIR),
    prompts_dir: Path = Path(DEFAULT_PROMPTS_DIR),
    logs_dir: Path = Path(DEFAULT_LOGS_DIR),
    timeout: Optional[float] = None,
    env: Optional[EnvSettings] = None,
) -> SessionConfig:
    """Merge command-line values over environment settings.
    
    Explicit arguments win over the environment. Raises ConfigError when the
    API key, model or endpoint URL is missing from both.
    """
    if env is None:
        env = EnvSettings()
    
    api_key = api_key or env.api_key
    model = model or env.model
    url = url or env.url
    
    if not api_key:
        raise ConfigError(
            "Missing LLM provider API key. Use --api-key flag or LLM_PROVIDER_KEY env var"
        )
    if not model:
        raise ConfigError("Missing LLM model. Use --model flag or LLM_MODEL env var")
    if not url:
        raise ConfigError(
            "Missing chat completion URL. Use --url flag or CHAT_COMPLETION_URL env var"
        )
    
    return SessionConfig(
        api_key=api_key,
        model=model,
        url=url,
        temperature=parse_temperature(temperature if temperature is not None else env.temperature),
        input_file=input_file,
        input_dir=input_dir,
        prompts_dir=prompts_dir,
        logs_dir=logs_dir,
        timeout=timeout if timeout is not None else (env.timeout or DEFAULT_TIMEOUT),
    )
