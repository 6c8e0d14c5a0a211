from typing import Sequence


class GrammarError(ValueError):
    ...


class InvalidSymbol(GrammarError):
    def __init__(self, symbol: str, reason: str):
        self.symbol = symbol
        super().__init__(f"invalid symbol {symbol!r}: {reason}")


class UnknownSymbol(GrammarError):
    def __init__(self, symbol: str, expected: str = "symbol"):
        self.symbol = symbol
        super().__init__(f"{symbol!r} is not a declared {expected}")


class MalformedProduction(GrammarError):
    def __init__(self, origin: str, rhs: Sequence[str], reason: str):
        self.origin = origin
        self.rhs = "".join(map(str, rhs))
        super().__init__(
            f"production {origin}::={self.rhs} is not in Chomsky Normal Form: {reason}"
        )


class InvalidQuery(GrammarError):
    def __init__(self, word: Sequence[str], reason: str):
        self.word = "".join(map(str, word))
        super().__init__(f"cannot run CYK on {self.word!r}: {reason}")


class GrammarSyntaxError(GrammarError):
    def __init__(self, line: str, line_number: int, reason: str):
        self.line = line
        self.line_number = line_number
        super().__init__(f"line {line_number}: {reason}\n > {line}")
