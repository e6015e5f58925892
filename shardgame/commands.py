"""Text commands typed into chat and queued for the systems that run them."""

from __future__ import annotations

import argparse
import shlex
from collections import deque
from collections.abc import Callable, Iterator, Sequence
from typing import Any, TypeVar

C = TypeVar("C", bound="TextCommand")

DEFAULT_START_CHARACTER = "["


class _CommandParseError(ValueError):
    """Raised when a command line does not match its command's arguments."""


class _CommandParser(argparse.ArgumentParser):
    """An argument parser that raises instead of printing and exiting."""

    def error(self, message: str) -> Any:
        raise _CommandParseError(f"{self.format_usage()}{self.prog}: error: {message}")

    def exit(self, status: int = 0, message: str | None = None) -> Any:
        raise _CommandParseError(message or "")

    def print_help(self, file=None) -> None:
        raise _CommandParseError(self.format_help())

    def print_usage(self, file=None) -> None:
        raise _CommandParseError(self.format_usage())


class TextCommand:
    """A command with aliases; subclasses add arguments in build_parser."""

    aliases: tuple[str, ...] = ()

    @classmethod
    def build_parser(cls) -> argparse.ArgumentParser:
        return _CommandParser(prog=cls.__name__.lower(), add_help=True)

    @classmethod
    def from_args(cls: type[C], args: Sequence[str]) -> C:
        """Parse a full argument list whose first item is the command name."""
        parser = cls.build_parser()
        if args:
            parser.prog = args[0]
        namespace = parser.parse_args(list(args[1:]))
        return cls(**vars(namespace))


Reply = Callable[[str], Any]


class TextCommands:
    """Registered commands, their aliases and their pending invocations."""

    def __init__(self, start_character: str = DEFAULT_START_CHARACTER) -> None:
        self.start_character = start_character
        self._queues: dict[type, deque[tuple[Any, TextCommand]]] = {}
        self._aliases: dict[str, type] = {}

    def is_command(self, name: str) -> bool:
        return name in self._aliases

    def register(self, command_type: type[TextCommand]) -> None:
        self._queues[command_type] = deque()
        for alias in command_type.aliases:
            self._aliases[alias] = command_type

    def try_split_exec(self, sender: Any, line: str, reply: Reply | None) -> bool:
        """Run a chat line if it starts with the command character."""
        if not line.startswith(self.start_character):
            return False
        try:
            args = shlex.split(line[len(self.start_character):])
        except ValueError:
            return False
        return self.try_exec(sender, args, reply)

    def try_exec(self, sender: Any, args: Sequence[str], reply: Reply | None) -> bool:
        """Queue a command; parse errors are sent back through reply.

        Returns False when the name is unknown or there is no one to reply to.
        """
        if not args:
            return False
        command_type = self._aliases.get(args[0])
        if command_type is None or reply is None:
            return False
        try:
            instance = command_type.from_args(args)
        except _CommandParseError as exc:
            reply(str(exc))
        else:
            self._queues[command_type].append((sender, instance))
        return True

    def drain(self, command_type: type[C]) -> Iterator[tuple[Any, C]]:
        """Take every pending invocation of a command type."""
        try:
            queue = self._queues[command_type]
        except KeyError:
            raise KeyError("tried to execute unregistered text command") from None
        pending = list(queue)
        queue.clear()
        return iter(pending)