"""interpreter: line interpreter and command-line front end."""

from yucon.interpreter.cli import build_parser, main
from yucon.interpreter.session import CommandResult, Interpreter

__all__ = [
    # Session
    "Interpreter",
    "CommandResult",
    # CLI
    "build_parser",
    "main",
]
