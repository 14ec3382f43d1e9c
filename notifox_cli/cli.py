"""CLI entry point: ``notifox send``."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, Sequence, TextIO

from services.notifications import Channel, NotificationResult, format_response_details, send_alert

from . import __version__
from .config.models import ClientSettings, SendOptions
from .configuration import ConfigurationError, build_client, configure_logging, load_client_settings

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

COMMANDS = ("send",)

__all__ = ["EXIT_FAILURE", "EXIT_SUCCESS", "build_parser", "main", "read_message"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="notifox", description="Send alerts through Notifox")
    parser.add_argument("--version", action="version", version=f"notifox-cli {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    send = subparsers.add_parser("send", help="Send an alert", description="Send an alert")
    send.add_argument("-a", "--audience", default="", help="audience to send the alert to")
    send.add_argument(
        "-c",
        "--channel",
        default="",
        help="channel to send through (sms|email)",
    )
    send.add_argument(
        "-m",
        "--message",
        default="",
        help="message to send; read from stdin when omitted",
    )
    send.add_argument(
        "-s",
        "--subject",
        default="",
        help="email subject, sent as the first line of the message (email only)",
    )
    send.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print the message ID, cost and part count on success",
    )
    send.add_argument(
        "--debug",
        action="count",
        default=0,
        help="increase log verbosity (repeat for HTTP-level logs)",
    )
    return parser


def print_usage(stream: TextIO) -> None:
    stream.write(
        "Usage: notifox <command> [flags]\n"
        "\n"
        "Commands:\n"
        "  send    Send an alert\n"
        "\n"
        "Use 'notifox send -h' for help on the send command\n"
    )


def read_message(message_flag: str, stdin: Optional[TextIO] = None) -> str:
    """Return ``message_flag`` or, when empty, piped stdin stripped of whitespace."""

    if message_flag:
        return message_flag
    source = stdin if stdin is not None else sys.stdin
    if source is None or source.isatty():
        return ""
    return source.read().strip()


def _validate(options: SendOptions) -> Optional[str]:
    if not options.audience:
        return "-a/--audience is required"
    if not options.channel:
        return "-c/--channel is required"
    if not options.message:
        return "message is required (provide via -m/--message or stdin)"
    try:
        Channel.parse(options.channel)
    except ValueError:
        return f"channel must be 'sms' or 'email', got '{options.channel}'"
    return None


async def _run_send(options: SendOptions, settings: ClientSettings) -> NotificationResult:
    async with build_client(settings) as client:
        return await send_alert(
            client,
            options.audience,
            options.channel,
            options.message,
            options.subject,
            verbose=options.verbose,
            policy=settings.policy,
        )


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    out = stdout or sys.stdout
    err = stderr or sys.stderr
    args_list: List[str] = list(argv) if argv is not None else sys.argv[1:]

    if not args_list:
        print_usage(err)
        return EXIT_FAILURE
    command = args_list[0]
    if not command.startswith("-") and command not in COMMANDS:
        err.write(f"Error: unknown command '{command}'\n")
        err.write(f"Available commands: {', '.join(COMMANDS)}\n")
        return EXIT_FAILURE

    parser = build_parser()
    args = parser.parse_args(args_list)
    if args.command is None:
        print_usage(err)
        return EXIT_FAILURE

    configure_logging(args.debug)

    try:
        message = read_message(args.message, stdin)
    except OSError as exc:
        err.write(f"Error reading message: {exc}\n")
        return EXIT_FAILURE

    options = SendOptions(
        audience=args.audience.strip(),
        channel=args.channel,
        message=message,
        subject=args.subject,
        verbose=args.verbose,
    )
    problem = _validate(options)
    if problem is not None:
        err.write(f"Error: {problem}\n")
        return EXIT_FAILURE

    try:
        settings = load_client_settings()
    except ConfigurationError as exc:
        err.write(f"Error initializing app: {exc}\n")
        return EXIT_FAILURE

    result = asyncio.run(_run_send(options, settings))
    if not result.success:
        reason = result.error.reason if result.error else "unknown error"
        err.write(f"Error sending alert: {reason}\n")
        return EXIT_FAILURE

    if options.verbose and result.response is not None:
        for line in format_response_details(result.response):
            out.write(f"{line}\n")
    out.write("Alert sent successfully!\n")
    logger.debug("Alert delivered after %s attempt(s)", result.attempts)
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover - manual invocation hook
    sys.exit(main())
