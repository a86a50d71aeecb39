"""
Chessrelay CLI - Command-line interface for the relay.

Usage:
    chessrelay serve [--host HOST] [--port PORT]   Run the relay server
    chessrelay code                                Print a fresh room code

PORT, HOST and CHESSRELAY_LOG_LEVEL in the environment set the defaults.
"""

import argparse
import logging
import sys


def build_parser() -> argparse.ArgumentParser:
    from .api.app import HOST, PORT, LOG_LEVEL

    parser = argparse.ArgumentParser(
        description="Chessrelay - two-player chess matchmaking relay",
        prog="chessrelay",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the relay server")
    serve_parser.add_argument("--host", default=HOST, help=f"Bind address (default: {HOST})")
    serve_parser.add_argument("--port", type=int, default=PORT, help=f"Listen port (default: {PORT})")
    serve_parser.add_argument("--log-level", default=LOG_LEVEL, help=f"Logging level (default: {LOG_LEVEL})")

    # Code command
    subparsers.add_parser("code", help="Print a freshly generated room code")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "code":
        cmd_code(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the relay under uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info("Server listening on %s:%d", args.host, args.port)
    uvicorn.run("chessrelay.api.app:app", host=args.host, port=args.port, log_level=args.log_level.lower())


def cmd_code(args):
    """Print one room code."""
    from .session import generate_room_code

    print(generate_room_code())


if __name__ == "__main__":
    main()
