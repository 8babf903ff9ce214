"""CLI entry point: run `inlinemod src/lib.rs` or `python -m inlinemod src/lib.rs`."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .analysis.module_system import LoadError
    from .compiler.driver import inline

    parser = argparse.ArgumentParser(
        prog="inlinemod",
        description="Print a Rust source file with every `mod name;` replaced by its file's contents.",
    )
    parser.add_argument("file", type=Path, help="Path to the crate root (or any .rs file)")
    parser.add_argument("--not-root", action="store_true",
                        help="Treat FILE as an ordinary module file rather than a crate root")
    parser.add_argument("--annotate-paths", action="store_true",
                        help="Mark every inlined module with the file it was loaded from")
    parser.add_argument("--errors", action="store_true",
                        help="Report modules that could not be inlined and exit 2 if there are any")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Logging level (default: WARNING)")
    parser.add_argument("-o", "--output", type=Path, help="Write the result here instead of stdout")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        result = inline(
            args.file,
            root=not args.not_root,
            track_errors=args.errors,
            annotate_paths=args.annotate_paths,
        )
    except LoadError as e:
        sys.stderr.write(f"inlinemod: error: {e}\n")
        return 1

    text = result.render()
    if args.output is not None:
        try:
            args.output.write_text(text, encoding="utf-8")
        except OSError as e:
            sys.stderr.write(f"inlinemod: error: could not write output: {e}\n")
            return 1
    else:
        sys.stdout.write(text)

    if args.errors and result.has_errors():
        result.reporter().print_errors()
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
