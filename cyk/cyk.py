import logging
from itertools import product
from typing import Sequence

from prettytable import PrettyTable
from typeguard import typechecked

from grammar import (
    Expansion,
    Grammar,
    InvalidQuery,
    NonTerminal,
    Terminal,
    UnknownSymbol,
)

logger = logging.getLogger(__name__)

Span = tuple[int, int]
ReversedGrammar = dict[Expansion, set[NonTerminal]]

CELL_SEPARATOR = "\t"
EMPTY_CELL = "∅"


def check_query(grammar: Grammar, word: Sequence[str]) -> list[Terminal]:
    """Validates a query and returns the terminals spelling ``word``."""
    terminals: list[Terminal] = []
    for char in word:
        try:
            terminals.append(grammar.terminal(char))
        except UnknownSymbol:
            raise InvalidQuery(word, f"{char!r} is not a terminal") from None
    if grammar.is_empty():
        raise InvalidQuery(word, "the grammar has no non-terminals")
    if grammar.start is None:
        raise InvalidQuery(word, "the grammar has no start symbol")
    return terminals


def reverse_grammar(grammar: Grammar) -> ReversedGrammar:
    reversed_grammar: ReversedGrammar = {}
    for root, expansion in grammar.iter_productions():
        reversed_grammar.setdefault(expansion, set()).add(root)
    return reversed_grammar


class CYKTable(dict[Span, set[NonTerminal]]):
    """The triangular CYK table of a word.

    ``table[(i, j)]`` is the set of non-terminals deriving ``word[i..j]``
    (both ends inclusive). Spans outside the triangle read as empty.
    """

    def __init__(self, grammar: Grammar, word: Sequence[str]):
        super().__init__()
        self.grammar: Grammar = grammar
        self.terminals: list[Terminal] = check_query(grammar, word)
        self.word: tuple[str, ...] = tuple(word)
        self.construct()

    def __missing__(self, span: Span) -> set[NonTerminal]:
        return set()

    @property
    def n(self) -> int:
        return len(self.word)

    def construct(self):
        reversed_grammar = reverse_grammar(self.grammar)

        for col, terminal in enumerate(self.terminals):
            self[(col, col)] = set(reversed_grammar.get(Expansion([terminal]), ()))

        for length in range(2, self.n + 1):
            for col in range(self.n - length + 1):
                span = (col, col + length - 1)
                cell: set[NonTerminal] = set()
                for mid in range(col + 1, col + length):
                    for children in product(
                        self[(col, mid - 1)], self[(mid, span[1])]
                    ):
                        cell |= reversed_grammar.get(Expansion(children), set())
                self[span] = cell

        logger.debug(
            "filled %d cells for %r, %d non-empty, derived: %s",
            len(self),
            "".join(self.word),
            sum(1 for cell in self.values() if cell),
            self.accepts(),
        )

    def accepts(self) -> bool:
        if self.n == 0:
            return False
        return self.grammar.start in self[(0, self.n - 1)]

    def ordered(self, span: Span) -> list[NonTerminal]:
        cell = self[span]
        return [symbol for symbol in self.grammar.non_terminals if symbol in cell]

    def format_cell(self, span: Span) -> str:
        return "".join(str(symbol) for symbol in self.ordered(span))

    def to_string(self, separator: str = CELL_SEPARATOR) -> str:
        return "".join(
            separator.join(self.format_cell((i, j)) for j in range(self.n)) + "\n"
            for i in range(self.n)
        )

    def to_pretty_table(self) -> PrettyTable:
        table = PrettyTable()

        table.field_names = ["ℓ \\ i"] + [
            f"{col}:{char}" for col, char in enumerate(self.word)
        ]

        for length in range(self.n, 0, -1):
            row: list[str] = [str(length)]
            for col in range(self.n):
                end = col + length - 1
                if end >= self.n:
                    row.append("")
                elif cell := self.ordered((col, end)):
                    row.append("{" + ",".join(str(symbol) for symbol in cell) + "}")
                else:
                    row.append(EMPTY_CELL)
            table.add_row(row)

        return table

    def __str__(self):
        return self.to_string()


@typechecked
def cyk_parse(grammar: Grammar, word: str | Sequence[str]) -> CYKTable:
    return CYKTable(grammar, word)


@typechecked
def is_derived(grammar: Grammar, word: str | Sequence[str]) -> bool:
    return cyk_parse(grammar, word).accepts()


@typechecked
def algorithm_state_to_string(
    grammar: Grammar, word: str | Sequence[str], separator: str = CELL_SEPARATOR
) -> str:
    return cyk_parse(grammar, word).to_string(separator)
