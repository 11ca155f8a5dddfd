"""Console commands and the registry that finds them by name."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence

Evaluator = Callable[[Any, List[str]], Any]


class Command(ABC):
    """A named command that can be evaluated for a sender."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The name the command is registered under."""

    @abstractmethod
    def load(self) -> None:
        """Prepare the command after registration."""

    @abstractmethod
    def kill(self) -> None:
        """Release anything the command holds."""

    @abstractmethod
    def evaluate(self, sender: Any, params: List[str]) -> None:
        """Run the command."""

    @abstractmethod
    def complete(self, sender: Any, params: List[str]) -> List[str]:
        """Completion suggestions for the parameters typed so far."""


class SimpleCommand(Command):
    """A command backed by a single function."""

    def __init__(self, name: str, evaluate: Evaluator) -> None:
        self._name = name
        self._evaluate = evaluate
        self.loaded = False
        self.completions: Sequence[str] = ()

    @property
    def name(self) -> str:
        return self._name

    def load(self) -> None:
        self.loaded = True

    def kill(self) -> None:
        self.loaded = False

    def evaluate(self, sender: Any, params: List[str]) -> None:
        self._evaluate(sender, list(params))

    def complete(self, sender: Any, params: List[str]) -> List[str]:
        """The known completions that start with the last parameter typed."""
        prefix = params[-1] if params else ""
        return [word for word in self.completions if word.startswith(prefix)]


class CommandManager:
    """Holds commands by name; lookups ignore case."""

    def __init__(self) -> None:
        self._commands: Optional[Dict[str, Command]] = {}

    def load(self) -> None:
        """Make the manager ready to take commands again after a kill."""
        if self._commands is None:
            self._commands = {}

    def kill(self) -> None:
        """Drop every command; the manager accepts no new ones afterwards."""
        self._commands = None

    def register_command(self, command: Command) -> None:
        """Register ``command`` under its name and load it."""
        if self._commands is None:
            raise RuntimeError("command manager has been killed")
        self._commands[command.name] = command
        command.load()

    def register(self, name: str, evaluate: Evaluator) -> None:
        """Register a function as a command called ``name``."""
        self.register_command(SimpleCommand(name, evaluate))

    def search(self, name: str) -> Optional[Command]:
        """The command whose name matches ``name`` ignoring case, or None."""
        if not self._commands:
            return None
        wanted = name.casefold()
        return next(
            (command for key, command in self._commands.items() if key.casefold() == wanted),
            None,
        )

    @property
    def names(self) -> Sequence[str]:
        return tuple(self._commands or ())