import argparse
import json
import sys
from pathlib import Path

from certverify.config.settings import Settings
from certverify.gateway.exceptions import GatewayError
from certverify.gateway.factory import GatewayFactory
from certverify.logging.logger import Log
from certverify.verification.aggregator import build_aggregator
from certverify.verification.exceptions import UnreadableInputError
from certverify.verification.file_loader import FileLoader

EXIT_OK = 0
EXIT_BACKEND_UNREACHABLE = 1
EXIT_UNREADABLE_INPUT = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="certverify",
        description="Certificate authenticity verification.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="verify a certificate file")
    analyze.add_argument("path", type=Path)
    analyze.add_argument(
        "--media-type",
        default=None,
        help="declared media type; guessed from the file name when omitted",
    )

    commands.add_parser("status", help="show backend health and ML model status")
    return parser


def run_analyze(settings: Settings, path: Path, media_type: str | None) -> int:
    """Load a file, run the pipeline, and print the result as JSON."""
    try:
        uploaded = FileLoader().load(path, media_type=media_type)
    except UnreadableInputError as exc:
        Log.error(str(exc))
        return EXIT_UNREADABLE_INPUT

    aggregator, gateway = build_aggregator(settings)
    try:
        result = aggregator.analyze(uploaded)
    finally:
        gateway.close()
    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_OK


def run_status(settings: Settings) -> int:
    """Print backend health and model status."""
    gateway = GatewayFactory.create(settings)
    try:
        report = {"health": gateway.health(), "models": gateway.model_status()}
    except GatewayError as exc:
        Log.error(f"Backend unreachable: {exc}")
        print(json.dumps({"error": str(exc)}, indent=2))
        return EXIT_BACKEND_UNREACHABLE
    finally:
        gateway.close()
    print(json.dumps(report, indent=2))
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> dispatch command."""
    args = _build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    if args.command == "analyze":
        return run_analyze(settings, args.path, args.media_type)
    return run_status(settings)


if __name__ == "__main__":
    sys.exit(main())
