from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .bf_interpreter import BrainfuckInterpreter, RuntimeFault
from .driver import DEFAULT_COMPILER, compile_java
from .errors import MissingSource, ToolchainError, UnmatchedBrackets, UsageError
from .files import read_source, write_java_source
from .transpiler import JavaTranspiler
from .wrapper import DEFAULT_OUTPUT, JavaWrapper

log = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG when verbose, WARNING otherwise."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)

    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(stream)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfjava",
        description="Translate a Brainfuck program into Java source and compile it with javac",
    )
    parser.add_argument("source", help="Path to Brainfuck source file")
    parser.add_argument(
        "outfile",
        nargs="?",
        default=DEFAULT_OUTPUT,
        help=f"Destination Java file; its stem names the class (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--class-name",
        help="Class name to emit instead of the output file stem",
    )
    parser.add_argument(
        "--no-compile",
        action="store_true",
        help="Write the Java source without invoking the compiler",
    )
    parser.add_argument(
        "--javac",
        default=DEFAULT_COMPILER,
        help=f"Java compiler executable (default: {DEFAULT_COMPILER})",
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Execute the program with the built-in runner after writing",
    )
    parser.add_argument(
        "--input",
        default="",
        help="Whitespace-separated integers supplied as stdin when running",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        wrapper = JavaWrapper.for_output(args.outfile, args.class_name)
    except UsageError as exc:
        parser.error(str(exc))

    try:
        source_text = read_source(args.source)
    except MissingSource as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except OSError as exc:
        log.error("Could not read %s: %s", args.source, exc, exc_info=True)
        return 1

    transpiler = JavaTranspiler(wrapper)
    try:
        translation = transpiler.translate_source(source_text)
    except UnmatchedBrackets as exc:
        print(exc.diagnostic, file=sys.stderr)
        log.debug("bracket check failed: %s", exc)
        return 1

    try:
        output_path = write_java_source(args.outfile, translation.source)
    except OSError as exc:
        log.error("Could not write %s: %s", args.outfile, exc, exc_info=True)
        return 1
    log.info("wrote class %s to %s", translation.class_name, output_path)

    if not args.no_compile:
        try:
            compile_java(output_path, compiler=args.javac)
        except ToolchainError as exc:
            log.error("%s", exc, exc_info=True)
            return 1

    if args.run:
        interpreter = BrainfuckInterpreter()
        try:
            output = interpreter.run(translation.normalized, input_text=args.input)
        except RuntimeFault as exc:
            print(f"Runtime error: {exc}", file=sys.stderr)
            return 1
        sys.stdout.write(output)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
