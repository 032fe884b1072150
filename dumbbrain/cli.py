"""DumbBrain CLI — command-line interface for the expression pipeline.

Commands:
  dumbbrain eval "<expr>"      — Evaluate an expression and print its value
  dumbbrain tokens "<expr>"    — Print the token stream
  dumbbrain tree "<expr>"      — Print the parse tree and any diagnostics
  dumbbrain llvm "<expr>"      — Emit LLVM IR for the expression
  dumbbrain repl               — Interactive read-eval-print loop
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from dumbbrain import __version__
from dumbbrain.binder import bind
from dumbbrain.config import DumbBrainConfig, load_config
from dumbbrain.emit import emit, HAS_LLVMLITE
from dumbbrain.errors import CompileError, nesting_limit, syntax_error
from dumbbrain.lexer import Token, tokenize
from dumbbrain.parser import parse
from dumbbrain.pipeline import PipelineResult, run
from dumbbrain.tree_printer import render_tree

logger = logging.getLogger(__name__)

QUIT_COMMANDS = (":quit", ":q", ":exit")


def _read_source(args: argparse.Namespace) -> str:
    if args.file:
        with open(args.file, "r") as f:
            return f.read()
    return args.expression or ""


def _format_errors(error: CompileError, output_format: str) -> str:
    if output_format == "json":
        return error.to_json()
    return "\n".join(str(e) for e in error.errors)


def _format_token(token: Token) -> str:
    line = f"{token.kind.value:<24} {token.text!r:<10} {token.span}"
    if token.value is not None:
        line += f"  {token.value}"
    return line


def format_result(result: PipelineResult, config: DumbBrainConfig) -> str:
    """Render a pipeline run the way the REPL and ``eval`` print it."""
    if config.format == "json":
        payload: dict = {"diagnostics": result.diagnostics}
        if result.ok:
            payload["value"] = result.value.to_dict() if result.value is not None else None
        return json.dumps(payload, indent=2)

    parts: list[str] = []
    if config.show_tokens:
        parts.extend(_format_token(t) for t in result.tokens)
    if config.show_tree and result.syntax is not None:
        parts.append(render_tree(result.syntax, "Expression").rstrip("\n"))
    if result.diagnostics:
        parts.extend(result.diagnostics)
    elif result.value is not None:
        parts.append(str(result.value))
    return "\n".join(parts)


def repl_step(line: str, config: DumbBrainConfig) -> tuple[str, bool]:
    """Run one REPL line. Returns the text to print and whether it failed."""
    try:
        with nesting_limit():
            result = run(line)
            return format_result(result, config), not result.ok
    except CompileError as e:
        return _format_errors(e, config.format), True


def cmd_eval(args: argparse.Namespace, config: DumbBrainConfig) -> int:
    """Evaluate an expression and print its value."""
    output, failed = repl_step(_read_source(args), config)
    print(output)
    return 1 if failed else 0


def cmd_tokens(args: argparse.Namespace, config: DumbBrainConfig) -> int:
    """Print every token, trivia included."""
    tokens = tokenize(_read_source(args))
    if config.format == "json":
        print(json.dumps([
            {
                "kind": t.kind.value,
                "position": t.position,
                "text": t.text,
                "value": t.value.to_dict() if t.value is not None else None,
                "span": [t.span.first_line, t.span.first_column,
                         t.span.last_line, t.span.last_column],
            }
            for t in tokens
        ], indent=2))
    else:
        for token in tokens:
            print(_format_token(token))
    return 0


def cmd_tree(args: argparse.Namespace, config: DumbBrainConfig) -> int:
    """Print the parse tree and diagnostics."""
    try:
        with nesting_limit():
            expression, diagnostics = parse(tokenize(_read_source(args)))
            tree = render_tree(expression)
    except CompileError as e:
        print(_format_errors(e, config.format))
        return 1
    print(tree, end="")
    for diagnostic in diagnostics:
        print(diagnostic)
    return 1 if diagnostics else 0


def cmd_llvm(args: argparse.Namespace, config: DumbBrainConfig) -> int:
    """Emit LLVM IR for the expression."""
    if not HAS_LLVMLITE:
        print(json.dumps({"error": "llvmlite is not installed"}))
        return 1
    try:
        with nesting_limit():
            expression, diagnostics = parse(tokenize(_read_source(args)))
            if diagnostics:
                raise CompileError([syntax_error(d) for d in diagnostics])
            ir = emit(bind(expression))
    except CompileError as e:
        print(_format_errors(e, config.format))
        return 1
    print(ir)
    return 0


def cmd_repl(args: argparse.Namespace, config: DumbBrainConfig) -> int:
    """Read lines until end of input, evaluating each one."""
    while True:
        try:
            line = input(config.prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0
        if line.strip() in QUIT_COMMANDS:
            return 0
        if not line.strip():
            continue
        output, _ = repl_step(line, config)
        if output:
            print(output)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dumbbrain",
        description="DumbBrain — a minimal typed expression language",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to a .dumbbrainrc.json file")
    parser.add_argument("--format", choices=["pretty", "json"], help="Output format")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    for name, func, help_text in (
        ("eval", cmd_eval, "Evaluate an expression"),
        ("tokens", cmd_tokens, "Print the token stream"),
        ("tree", cmd_tree, "Print the parse tree"),
        ("llvm", cmd_llvm, "Emit LLVM IR"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("expression", nargs="?", help="DumbBrain expression")
        p.add_argument("-f", "--file", help="Read the expression from a file")
        p.set_defaults(func=func)

    p_repl = subparsers.add_parser("repl", help="Interactive read-eval-print loop")
    p_repl.add_argument("--tree", action="store_true", help="Print the parse tree of each line")
    p_repl.set_defaults(func=cmd_repl)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = load_config(args.config)
    if args.format:
        config.format = args.format
    if getattr(args, "tree", False):
        config.show_tree = True

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("running %s with %s", args.command, config)

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
