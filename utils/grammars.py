GRAMMAR_AB = """
    S::=AB
    A::=a
    B::=b
"""

# a^n b^n, n >= 1
GRAMMAR_ANBN = """
    S::=AB|AC
    C::=SB
    A::=a
    B::=b
"""

# balanced brackets, with 'a' opening and 'b' closing
GRAMMAR_DYCK = """
    S::=SS|LR|LT
    T::=SR
    L::=a
    R::=b
"""

# non-empty words with as many a's as b's
GRAMMAR_EQUAL_AB = """
    S::=AB|BA|SS|AC|BD
    C::=SB
    D::=SA
    A::=a
    B::=b
"""

# Hopcroft, Motwani & Ullman, Example 7.34
GRAMMAR_HMU = """
    S::=AB|BC
    A::=BA|a
    B::=CC|b
    C::=AB|a
"""

# even-length palindromes over {a, b}
GRAMMAR_EVEN_PALINDROMES = """
    S::=AX|BY|AA|BB
    X::=SA
    Y::=SB
    A::=a
    B::=b
"""

SAMPLE_GRAMMARS = {
    "ab": GRAMMAR_AB,
    "anbn": GRAMMAR_ANBN,
    "dyck": GRAMMAR_DYCK,
    "equal_ab": GRAMMAR_EQUAL_AB,
    "hmu": GRAMMAR_HMU,
    "even_palindromes": GRAMMAR_EVEN_PALINDROMES,
}
