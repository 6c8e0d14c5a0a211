import logging
import re
from typing import Iterator, Mapping, Optional, Sequence

from .core import Expansion, NonTerminal, Symbol, Terminal
from .errors import (
    GrammarSyntaxError,
    InvalidSymbol,
    MalformedProduction,
    UnknownSymbol,
)

logger = logging.getLogger(__name__)

PRODUCTION_SYMBOL = "::="
ALTERNATIVE_SEPARATOR = "|"


class Grammar(Mapping[NonTerminal, tuple[Expansion, ...]]):
    """A context-free grammar in Chomsky Normal Form, built incrementally.

    Symbols are single letters: uppercase for non-terminals and lowercase for
    terminals. Every production is either ``A ::= a`` or ``A ::= BC``.
    Declaration order is preserved everywhere, so listings and rendered
    tables are reproducible.

    The grammar reads like a mapping from each non-terminal to its
    productions; use the ``add_*`` methods to change it.
    """

    __slots__ = ("_non_terminals", "_terminals", "_productions", "start")

    def __init__(self) -> None:
        self._non_terminals: dict[str, NonTerminal] = {}
        self._terminals: dict[str, Terminal] = {}
        self._productions: dict[NonTerminal, list[Expansion]] = {}
        self.start: Optional[NonTerminal] = None

    @property
    def non_terminals(self) -> tuple[NonTerminal, ...]:
        return tuple(self._non_terminals.values())

    @property
    def terminals(self) -> tuple[Terminal, ...]:
        return tuple(self._terminals.values())

    def is_declared(self, name: str) -> bool:
        return name in self._non_terminals or name in self._terminals

    def add_non_terminal(self, symbol: str) -> None:
        if not NonTerminal.is_valid_name(symbol):
            raise InvalidSymbol(symbol, "non-terminals must be uppercase letters")
        if self.is_declared(symbol):
            raise InvalidSymbol(symbol, "already registered")
        non_terminal = NonTerminal(symbol)
        self._non_terminals[symbol] = non_terminal
        self._productions[non_terminal] = []
        logger.debug("registered non-terminal %s", symbol)

    def add_terminal(self, symbol: str) -> None:
        if not Terminal.is_valid_name(symbol):
            raise InvalidSymbol(symbol, "terminals must be lowercase letters")
        if self.is_declared(symbol):
            raise InvalidSymbol(symbol, "already registered")
        self._terminals[symbol] = Terminal(symbol)
        logger.debug("registered terminal %s", symbol)

    def non_terminal(self, symbol: str) -> NonTerminal:
        try:
            return self._non_terminals[symbol]
        except (KeyError, TypeError):
            raise UnknownSymbol(symbol, "non-terminal") from None

    def terminal(self, symbol: str) -> Terminal:
        try:
            return self._terminals[symbol]
        except (KeyError, TypeError):
            raise UnknownSymbol(symbol, "terminal") from None

    def set_start_symbol(self, symbol: str) -> None:
        self.start = self.non_terminal(symbol)
        logger.debug("start symbol set to %s", symbol)

    def _to_expansion(self, origin: str, rhs: Sequence[str]) -> Expansion:
        if len(rhs) not in (1, 2):
            raise MalformedProduction(
                origin, rhs, f"expected 1 or 2 symbols, got {len(rhs)}"
            )
        symbols: list[Symbol] = []
        for name in rhs:
            if name in self._terminals:
                symbols.append(self._terminals[name])
            elif name in self._non_terminals:
                symbols.append(self._non_terminals[name])
            else:
                raise UnknownSymbol(name)

        expansion = Expansion(symbols)
        match expansion:
            case (Terminal(),) | (NonTerminal(), NonTerminal()):
                return expansion
            case (NonTerminal(),):
                raise MalformedProduction(
                    origin, rhs, "a single symbol must be a terminal"
                )
            case _:
                raise MalformedProduction(
                    origin, rhs, "a pair of symbols must both be non-terminals"
                )

    def add_production(self, origin: str, rhs: Sequence[str]) -> None:
        non_terminal = self.non_terminal(origin)
        expansion = self._to_expansion(origin, rhs)
        if expansion in self._productions[non_terminal]:
            logger.debug("ignoring duplicate production %s::=%s", origin, expansion)
            return
        self._productions[non_terminal].append(expansion)

    def remove_grammar(self) -> None:
        self._non_terminals.clear()
        self._terminals.clear()
        self._productions.clear()
        self.start = None
        logger.debug("grammar cleared")

    def get_productions(self, non_terminal: str) -> str:
        origin = self.non_terminal(non_terminal)
        definition = ALTERNATIVE_SEPARATOR.join(
            str(expansion) for expansion in self._productions[origin]
        )
        return f"{origin}{PRODUCTION_SYMBOL}{definition}"

    def get_grammar(self) -> str:
        return "\n".join(self.get_productions(name) for name in self._non_terminals)

    def iter_productions(self) -> Iterator[tuple[NonTerminal, Expansion]]:
        for origin, expansions in self._productions.items():
            for expansion in expansions:
                yield origin, expansion

    def is_empty(self) -> bool:
        return not self._non_terminals

    def __getitem__(self, origin: NonTerminal) -> tuple[Expansion, ...]:
        return tuple(self._productions[origin])

    def __contains__(self, origin) -> bool:
        return origin in self._productions

    def __iter__(self) -> Iterator[NonTerminal]:
        return iter(self._productions)

    def __len__(self) -> int:
        return len(self._productions)

    def __setitem__(self, key, value):
        raise Exception("Cannot modify grammar; use add_production instead")

    def __str__(self) -> str:
        return self.get_grammar()

    def __repr__(self) -> str:
        return "\n".join(
            f"{origin!r} ::= {' | '.join(repr(expansion) for expansion in expansions)}"
            for origin, expansions in self._productions.items()
        )

    @staticmethod
    def from_str(grammar_str: str, start: Optional[str] = None) -> "Grammar":
        return _parse_grammar(grammar_str, start)


RULE_PATTERN = re.compile(
    rf"^(?P<origin>\S+?)\s*{re.escape(PRODUCTION_SYMBOL)}(?P<definition>.*)$"
)


def iter_rules(grammar_str: str) -> Iterator[tuple[str, list[str]]]:
    for line_number, line in enumerate(grammar_str.splitlines(), start=1):
        line = line.split("#", 1)[0].strip()
        if not line:
            continue
        if (m := RULE_PATTERN.match(line)) is None:
            raise GrammarSyntaxError(
                line, line_number, f"expected <non-terminal>{PRODUCTION_SYMBOL}<rules>"
            )
        definition = m.group("definition").strip()
        if not definition:
            yield m.group("origin"), []
            continue
        alternatives = [
            re.sub(r"\s+", "", alternative)
            for alternative in definition.split(ALTERNATIVE_SEPARATOR)
        ]
        if not all(alternatives):
            raise GrammarSyntaxError(
                line, line_number, "empty productions are not supported"
            )
        yield m.group("origin"), alternatives


def _parse_grammar(grammar_str: str, start: Optional[str] = None) -> Grammar:
    """Parses the format produced by ``Grammar.get_grammar``."""
    rules = list(iter_rules(grammar_str))
    grammar = Grammar()

    def declare(name: str) -> None:
        if grammar.is_declared(name):
            return
        if name.isupper():
            grammar.add_non_terminal(name)
        else:
            grammar.add_terminal(name)

    for origin, _ in rules:
        if not grammar.is_declared(origin):
            grammar.add_non_terminal(origin)
    for _, alternatives in rules:
        for alternative in alternatives:
            for name in alternative:
                declare(name)

    for origin, alternatives in rules:
        for alternative in alternatives:
            grammar.add_production(origin, alternative)

    if start is not None:
        grammar.set_start_symbol(start)
    elif rules:
        # it is always assumed that the first rule defines the start symbol
        grammar.set_start_symbol(rules[0][0])
    return grammar
