from abc import ABC
from typing import Iterable, Iterator, Optional, Sequence


class Symbol(ABC):
    """A symbol in a grammar;
    Each is a single character, and its class decides its category"""

    def __init__(self, name: str) -> None:
        self.name = name

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.name))

    def __str__(self):
        return self.name

    def __eq__(self, other):
        if not isinstance(other, Symbol):
            return NotImplemented
        return type(self) is type(other) and self.name == other.name

    @staticmethod
    def is_valid_name(name: str) -> bool:
        return isinstance(name, str) and len(name) == 1 and name.isalpha()


class Terminal(Symbol):
    @staticmethod
    def is_valid_name(name: str) -> bool:
        return Symbol.is_valid_name(name) and name.islower()

    def matches(self, char: str) -> bool:
        return self.name == char

    def __repr__(self):
        return f"[bold blue]{self.name}[/bold blue]"


class NonTerminal(Symbol):
    @staticmethod
    def is_valid_name(name: str) -> bool:
        return Symbol.is_valid_name(name) and name.isupper()

    def __repr__(self):
        return f"[bold red]<{self.name}>[/bold red]"


class Expansion(tuple[Symbol, ...]):
    """The right-hand side of a production.

    In Chomsky Normal Form it is either a single terminal or a pair of
    non-terminals."""

    def __new__(cls, args: Optional[Iterable[Symbol]] = None) -> "Expansion":
        if args is None:
            args = []
        return tuple.__new__(Expansion, args)  # type: ignore

    def matches(self, word: Sequence[str]) -> bool:
        if len(self) == len(word):
            if all(isinstance(symbol, Terminal) for symbol in self):
                return all(
                    terminal.matches(char) for terminal, char in zip(self, word)
                )
        return False

    def perform_derivation(self, index, replacer: "Expansion") -> "Expansion":
        return Expansion(self[:index] + replacer + self[index + 1 :])

    def enumerate_non_terminals(self) -> Iterator[tuple[int, NonTerminal]]:
        for index, symbol in enumerate(self):
            if isinstance(symbol, NonTerminal):
                yield index, symbol

    def should_prune(self, word: Sequence[str], seen: set["Expansion"]) -> bool:
        # if this is a sentential form we have explored, just ignore it
        if self in seen:
            return True

        # no production shrinks a sentential form, so anything longer
        # than the word can never derive it
        if len(self) > len(word):
            return True

        # if we have a prefix of terminals which doesn't match the word
        # we should prune
        for symbol, char in zip(self, word):
            if isinstance(symbol, Terminal):
                if not symbol.matches(char):
                    return True
            else:
                return False
        # the sentential form is all terminals
        return len(self) != len(word)

    def __str__(self):
        return "".join(str(item) for item in self)

    def __repr__(self):
        return "".join(repr(item) for item in self)
