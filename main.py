import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.traceback import install

from cyk import cyk_parse
from grammar import Grammar, GrammarError
from utils.grammars import SAMPLE_GRAMMARS

install(show_locals=False)

console = Console(soft_wrap=True)
logger = logging.getLogger("cyk")


def setup_logging(verbose: bool = False) -> None:
    # LOG_LEVEL wins over -v
    level_name = os.getenv("LOG_LEVEL", "DEBUG" if verbose else "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cyk",
        description="Decide membership of words in a CNF grammar with the CYK algorithm.",
    )
    parser.add_argument(
        "grammar",
        nargs="?",
        help="grammar file with one 'X::=P1|P2' rule per line, '-' for stdin",
    )
    parser.add_argument("words", nargs="*", help="words to check; '' is the empty word")
    parser.add_argument(
        "--sample",
        choices=sorted(SAMPLE_GRAMMARS),
        help="use one of the bundled sample grammars instead of a file",
    )
    parser.add_argument("--start", help="start symbol (default: first rule)")
    parser.add_argument(
        "--table",
        choices=("none", "plain", "pretty"),
        default="none",
        help="also print the CYK table of every word",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.sample is not None:
        # with --sample every positional is a word
        if args.grammar is not None:
            args.words = [args.grammar, *args.words]
        args.grammar = None
    elif args.grammar is None:
        parser.error("a grammar file or --sample is required")
    return args


def read_grammar(args: argparse.Namespace) -> Grammar:
    if args.sample is not None:
        grammar_str = SAMPLE_GRAMMARS[args.sample]
    elif args.grammar == "-":
        grammar_str = sys.stdin.read()
    else:
        grammar_str = Path(args.grammar).read_text()
    return Grammar.from_str(grammar_str, args.start)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        grammar = read_grammar(args)
        logger.debug("start symbol is %s", grammar.start)
        console.print(grammar.get_grammar(), markup=False, highlight=False)

        for word in args.words:
            table = cyk_parse(grammar, word)
            verdict = (
                "[bold green]derived[/bold green]"
                if table.accepts()
                else "[bold red]not derived[/bold red]"
            )
            console.print(f"{escape(repr(word))}: {verdict}")
            if args.table == "plain":
                # rich expands tabs, so the rows bypass the console
                sys.stdout.write(table.to_string())
            elif args.table == "pretty":
                console.print(
                    table.to_pretty_table().get_string(), markup=False, highlight=False
                )
    except (GrammarError, OSError) as e:
        console.print(f"[bold red]error:[/bold red] {escape(str(e))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
