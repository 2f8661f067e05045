"""Entry point for running the CLI as a module."""

import argparse
import sys

from pydantic import ValidationError

from puid.configs.config import get_puid_config
from puid.core.generator import IdGenerator
from puid.infra.logging import setup_logging

from .config import CLIConfig
from .puid_cli import PuidCLI


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="puid",
        description="Generate prefixed, practically-unique identifiers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "prefixes",
        nargs="+",
        metavar="PREFIX",
        help="Identifier prefix, 1-8 ASCII letters or digits",
    )
    parser.add_argument(
        "-e",
        "--entropy",
        type=int,
        default=None,
        help="Random suffix length (default: from config, 12)",
    )
    parser.add_argument(
        "-n",
        "--count",
        type=int,
        default=1,
        help="Identifiers to print per prefix (default: 1)",
    )
    parser.add_argument(
        "--bench",
        type=int,
        default=None,
        metavar="N",
        help="Generate N ids for the first prefix and report throughput",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def _summarize(exc: ValidationError) -> str:
    """Flatten to ``generator.max_entropy: msg; ...`` on one line."""
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = get_puid_config()
        logging_config = config.logging.model_copy(
            update={
                "json_output": args.json_logs or config.logging.json_output,
                "level": "DEBUG" if args.debug else config.logging.level,
            }
        )
        setup_logging(logging_config, stream=sys.stderr)
    except ValidationError as exc:
        sys.stderr.write(f"puid: invalid configuration: {_summarize(exc)}\n")
        return 2
    except ValueError as exc:
        # logging rejects unknown level names
        sys.stderr.write(f"puid: invalid configuration: {exc}\n")
        return 2

    if args.count < 1 or (args.bench is not None and args.bench < 1):
        sys.stderr.write("puid: --count and --bench must be at least 1\n")
        return 2

    cli_config = CLIConfig(
        prefixes=args.prefixes,
        entropy=args.entropy,
        count=args.count,
        bench=args.bench,
    )
    return PuidCLI(cli_config, IdGenerator.from_config(config.generator)).run()


def cli_entry() -> None:
    """CLI entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    cli_entry()
