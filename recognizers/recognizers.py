import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Literal, Sequence

from more_itertools import first

from cyk.cyk import check_query, cyk_parse
from grammar import Expansion, Grammar

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 1000_000


class RecognizerError(Exception):
    ...


class Recognizer(ABC):
    def __init__(self, grammar: Grammar, word: str | Sequence[str]):
        check_query(grammar, word)
        self.grammar: Grammar = grammar
        self.word: tuple[str, ...] = tuple(word)

    @abstractmethod
    def recognizes(self) -> bool:
        ...


class SearchRecognizer(Recognizer, ABC):
    """Searches the leftmost derivations of the start symbol.

    Chomsky Normal Form has no empty productions, so sentential forms never
    shrink and the search space is bounded by the length of the word."""

    @abstractmethod
    def pop(self, rules: deque[Expansion]) -> Expansion:
        ...

    def recognizes(self) -> bool:
        rules: deque[Expansion] = deque([Expansion([self.grammar.start])])
        seen: set[Expansion] = set()

        n_iters = 0
        while rules and n_iters < MAX_ITERATIONS:
            if (rule := self.pop(rules)).matches(self.word):
                return True

            seen.add(rule)

            leftmost = first(rule.enumerate_non_terminals(), default=None)
            if leftmost is not None:
                index, symbol = leftmost
                next_forms = []
                for replacement in self.grammar[symbol]:
                    if (
                        next_form := rule.perform_derivation(index, replacement)
                    ).should_prune(self.word, seen):
                        continue
                    next_forms.append(next_form)
                self.push(rules, next_forms)

            n_iters += 1

        if rules:
            raise RecognizerError("Too many iterations")
        logger.debug("explored %d sentential forms for %r", n_iters, self.word)
        return False

    def push(self, rules: deque[Expansion], next_forms: list[Expansion]) -> None:
        rules.extend(next_forms)


class BfsRecognizer(SearchRecognizer):
    def pop(self, rules: deque[Expansion]) -> Expansion:
        return rules.popleft()


class DfsRecognizer(SearchRecognizer):
    def pop(self, rules: deque[Expansion]) -> Expansion:
        return rules.pop()

    def push(self, rules: deque[Expansion], next_forms: list[Expansion]) -> None:
        rules.extend(reversed(next_forms))


class CykRecognizer(Recognizer):
    def recognizes(self) -> bool:
        return cyk_parse(self.grammar, self.word).accepts()


def recognize(
    grammar: Grammar,
    word: str | Sequence[str],
    *,
    recognizer: Literal["cyk", "dfs", "bfs"] = "cyk",
) -> bool:
    cls = globals().get(f"{recognizer.capitalize()}Recognizer")
    if cls is None:
        raise ValueError(f"unknown recognizer {recognizer!r}")
    return cls(grammar, word).recognizes()
