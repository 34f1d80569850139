import argparse
import logging
import sys
from collections.abc import Sequence

from cwstack.check import check_rules
from cwstack.config import Settings
from cwstack.examples import walkthrough
from cwstack.load import load_rules_from_file
from cwstack.report import RulesFileResult, print_check_diagnostics, print_check_table
from cwstack.result import Err, Ok
from cwstack.stack import CounterweightStack

logger = logging.getLogger(__name__)


def handle_demo() -> int:
    for step in walkthrough():
        print(step.describe())
    return 0


def handle_check(files: Sequence[str], *, verbose: bool) -> int:
    """Load, lint, and report on a list of rules .py files."""
    results: list[RulesFileResult] = []

    for path in files:
        if not path.endswith(".py"):
            logger.warning("Not a rules .py file: %s", path)
            results.append(
                RulesFileResult(
                    file_path=path,
                    success=False,
                    error="not a .py file, skipped",
                    check=None,
                )
            )
            continue

        rules_or_err = load_rules_from_file(path)
        match rules_or_err:
            case str(err):
                results.append(
                    RulesFileResult(file_path=path, success=False, error=err, check=None)
                )
            case rules:
                results.append(
                    RulesFileResult(
                        file_path=path,
                        success=True,
                        error=None,
                        check=check_rules(rules),
                    )
                )

    print_check_table(results, sys.stdout)

    if verbose:
        print_check_diagnostics(results, sys.stdout)

    any_failure = any(
        not r.success or (r.check is not None and not r.check.is_well_formed)
        for r in results
    )
    return 1 if any_failure else 0


def handle_replay(path: str, ops: Sequence[str]) -> int:
    """Apply ``push:X`` / ``pop:X`` / ``peek`` / ``clear`` to a fresh stack.

    Elements are plain strings, so this only makes sense for rule files whose
    elements are strings.
    """
    match load_rules_from_file(path):
        case str(err):
            print(f"Error loading {path}: {err}", file=sys.stderr)
            return 1
        case rules:
            stack: CounterweightStack[str] = CounterweightStack(rules)

    for op in ops:
        name, _, value = op.partition(":")
        match name:
            case "push":
                stack.push(value)
                print(f"push {value!r:<12} size={stack.size()}")
            case "pop":
                match stack.try_pop(value):
                    case Ok(popped):
                        print(f"pop  {value!r:<12} -> {popped!r} size={stack.size()}")
                    case Err(rejected):
                        print(
                            f"pop  {value!r:<12} rejected ({rejected.reason.value}) "
                            f"size={stack.size()}"
                        )
            case "peek":
                print(f"peek {'':<12} -> {stack.peek()!r}")
            case "clear":
                stack.clear()
                print(f"clear{'':<13} size={stack.size()}")
            case _:
                print(f"Unknown operation: {op!r}", file=sys.stderr)
                return 2
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``cwstack`` console script."""
    match Settings.from_env():
        case Ok(settings):
            pass
        case Err(e):
            print(f"Configuration error: {e}", file=sys.stderr)
            return 2
    logging.basicConfig(level=settings.log_level_value)

    parser = argparse.ArgumentParser(
        prog="cwstack",
        description="Tools for counterweight stacks and their rule sets",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command: demo
    subparsers.add_parser(
        "demo",
        help="Replay the begin/end, if/then keyword example and print each step.",
    )

    # Command: check
    check_parser = subparsers.add_parser(
        "check",
        help="Load one or more rules .py files and lint the rule sets.",
    )
    check_parser.add_argument(
        "files",
        nargs="+",
        metavar="FILE",
        help="Rules .py file(s) exposing a *_rules() factory.",
    )
    check_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Print per-file diagnostics after the table.",
    )

    # Command: replay
    replay_parser = subparsers.add_parser(
        "replay",
        help="Apply stack operations to a fresh stack built from a rules file.",
    )
    replay_parser.add_argument("file", metavar="FILE", help="Rules .py file.")
    replay_parser.add_argument(
        "ops",
        nargs="+",
        metavar="OP",
        help="push:VALUE, pop:VALUE, peek or clear.",
    )

    args = parser.parse_args(argv)

    match args.command:
        case "demo":
            return handle_demo()
        case "check":
            return handle_check(args.files, verbose=args.verbose)
        case "replay":
            return handle_replay(args.file, args.ops)
        case None:
            parser.print_help()
            return 1
        case _:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            parser.print_help()
            return 1


if __name__ == "__main__":
    sys.exit(main())
