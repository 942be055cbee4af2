"""
Reunion chat CLI.

Usage:
    reunion-chat serve [--host 0.0.0.0] [--port 8080] [--reload]
        Runs the chat relay API under uvicorn.

    reunion-chat ask "When is the shuttle?" [--backend-url URL] [--timeout 35]
        Asks the relay, falling back to the canned answers if it is unreachable.

    reunion-chat ask --interactive [--backend-url URL]
        Reads questions from stdin until EOF or an empty line.

    reunion-chat fallback "How much does it cost?"
        Prints the canned answer only; no network access.
"""

import argparse
import logging
import sys

from reunion_chat.client import DEFAULT_BACKEND_URL, ReunionChatClient
from reunion_chat.fallback import fallback

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace) -> None:
    """Execute the 'serve' subcommand: run the API server."""
    import uvicorn

    from reunion_chat.config import settings

    # Startup and request timing logs are emitted at INFO
    logging.getLogger("reunion_chat").setLevel(logging.DEBUG if args.verbose else logging.INFO)

    uvicorn.run(
        "reunion_chat.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_level="debug" if args.verbose else "info",
    )


def cmd_ask(args: argparse.Namespace) -> None:
    """Execute the 'ask' subcommand: one question, or a stdin session."""
    client = ReunionChatClient(backend_url=args.backend_url, timeout=args.timeout)

    if args.interactive:
        print("Ask me anything about the reunion (empty line to quit).")
        for line in sys.stdin:
            if not line.strip():
                break
            print(client.ask(line))
        return

    if not args.question:
        print("Error: a question is required (or use --interactive)", file=sys.stderr)
        sys.exit(2)

    reply = client.ask(" ".join(args.question))
    if reply is None:
        print("Error: question is empty", file=sys.stderr)
        sys.exit(2)
    print(reply)


def cmd_fallback(args: argparse.Namespace) -> None:
    """Execute the 'fallback' subcommand: print the canned answer."""
    print(fallback(" ".join(args.question)))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reunion-chat",
        description="Reunion chat relay and client",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # 'serve' subcommand
    serve_parser = subparsers.add_parser("serve", help="Run the chat relay API")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    serve_parser.set_defaults(func=cmd_serve)

    # 'ask' subcommand
    ask_parser = subparsers.add_parser("ask", help="Ask the relay a question")
    ask_parser.add_argument("question", nargs="*", help="Question text")
    ask_parser.add_argument(
        "--backend-url", type=str, default=DEFAULT_BACKEND_URL, help="Relay base URL"
    )
    ask_parser.add_argument(
        "--timeout", type=float, default=35.0, help="Seconds to wait before falling back"
    )
    ask_parser.add_argument(
        "-i", "--interactive", action="store_true", help="Read questions from stdin"
    )
    ask_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    ask_parser.set_defaults(func=cmd_ask)

    # 'fallback' subcommand
    fallback_parser = subparsers.add_parser("fallback", help="Print the offline canned answer")
    fallback_parser.add_argument("question", nargs="+", help="Question text")
    fallback_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    fallback_parser.set_defaults(func=cmd_fallback)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    if getattr(args, "verbose", False):
        level = logging.DEBUG
    elif args.command == "serve":
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args.func(args)


if __name__ == "__main__":
    main()
