from .cfg import ALTERNATIVE_SEPARATOR, PRODUCTION_SYMBOL, Grammar
from .core import Expansion, NonTerminal, Symbol, Terminal
from .errors import (
    GrammarError,
    GrammarSyntaxError,
    InvalidQuery,
    InvalidSymbol,
    MalformedProduction,
    UnknownSymbol,
)
