from itertools import product

import pytest

from grammar import Grammar, InvalidQuery
from recognizers import RecognizerError, recognize
from utils.grammars import (
    GRAMMAR_AB,
    GRAMMAR_ANBN,
    GRAMMAR_DYCK,
    GRAMMAR_EQUAL_AB,
    GRAMMAR_EVEN_PALINDROMES,
    GRAMMAR_HMU,
)

MAX_LENGTH = 6


def words(alphabet: str = "ab", max_length: int = MAX_LENGTH):
    for length in range(max_length + 1):
        for letters in product(alphabet, repeat=length):
            yield "".join(letters)


def is_anbn(word: str) -> bool:
    n = len(word) // 2
    return n > 0 and word == "a" * n + "b" * n


def is_dyck(word: str) -> bool:
    depth = 0
    for char in word:
        depth += 1 if char == "a" else -1
        if depth < 0:
            return False
    return bool(word) and depth == 0


def is_equal_ab(word: str) -> bool:
    return bool(word) and word.count("a") == word.count("b")


def is_even_palindrome(word: str) -> bool:
    return bool(word) and len(word) % 2 == 0 and word == word[::-1]


@pytest.mark.parametrize(
    "grammar,language",
    [
        (GRAMMAR_AB, lambda word: word == "ab"),
        (GRAMMAR_ANBN, is_anbn),
        (GRAMMAR_DYCK, is_dyck),
        (GRAMMAR_EQUAL_AB, is_equal_ab),
        (GRAMMAR_EVEN_PALINDROMES, is_even_palindrome),
    ],
)
def test_cyk_decides_the_language(grammar, language):
    cfg = Grammar.from_str(grammar)
    for word in words():
        assert recognize(cfg, word, recognizer="cyk") == language(word), word


@pytest.mark.parametrize(
    "grammar",
    [GRAMMAR_AB, GRAMMAR_ANBN, GRAMMAR_DYCK, GRAMMAR_EQUAL_AB, GRAMMAR_HMU],
)
def test_cyk_agrees_with_derivation_search(grammar):
    cfg = Grammar.from_str(grammar)
    for word in words(max_length=5):
        expected = recognize(cfg, word, recognizer="bfs")
        assert recognize(cfg, word, recognizer="dfs") == expected, word
        assert recognize(cfg, word, recognizer="cyk") == expected, word


def test_can_parse_dyck():
    cfg = Grammar.from_str(GRAMMAR_DYCK)
    assert recognize(cfg, "abaabb", recognizer="cyk")
    assert recognize(cfg, "aaabbb", recognizer="bfs")
    assert recognize(cfg, "aaabbb", recognizer="dfs")
    assert not recognize(cfg, "aabbb", recognizer="cyk")


@pytest.mark.parametrize("recognizer", ["cyk", "dfs", "bfs"])
def test_recognizers_validate_the_query(recognizer):
    cfg = Grammar.from_str(GRAMMAR_AB)
    with pytest.raises(InvalidQuery):
        recognize(cfg, "abc", recognizer=recognizer)


def test_unknown_recognizer():
    cfg = Grammar.from_str(GRAMMAR_AB)
    with pytest.raises(ValueError):
        recognize(cfg, "ab", recognizer="earley")


def test_search_budget(monkeypatch):
    cfg = Grammar.from_str(GRAMMAR_AB)
    # "ba" is rejected after exploring S and then AB
    monkeypatch.setattr("recognizers.recognizers.MAX_ITERATIONS", 2)
    assert not recognize(cfg, "ba", recognizer="bfs")
    assert not recognize(cfg, "ba", recognizer="dfs")

    monkeypatch.setattr("recognizers.recognizers.MAX_ITERATIONS", 1)
    with pytest.raises(RecognizerError):
        recognize(cfg, "ba", recognizer="bfs")
