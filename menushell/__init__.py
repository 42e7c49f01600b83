"""Menu-driven interactive command shells with typed commands, history and completion."""

__version__ = "0.1.0"

__all__ = [
    "asyncsession",
    "colors",
    "commands",
    "demo",
    "history",
    "inputhandler",
    "keyboard",
    "scheduler",
    "session",
    "storage",
    "terminal",
    "tokenizer",
]