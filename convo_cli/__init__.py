"""Convo CLI - an interactive terminal client for chat-completion endpoints."""

__app_name__ = "convo"
__version__ = "0.1.0"
