"""
TextMarketer Client - Command Line Entry Point.

Small operational CLI over the TextMarketer adapter, configured from the
environment (see textmarketer.config).

Usage:
    # Show remaining credits
    python -m textmarketer.run_textmarketer credits

    # Show account information (own account or a sub-account)
    python -m textmarketer.run_textmarketer account
    python -m textmarketer.run_textmarketer account --account-id 1234

    # Check a keyword
    python -m textmarketer.run_textmarketer keyword PIZZA

    # List groups / show a group
    python -m textmarketer.run_textmarketer groups
    python -m textmarketer.run_textmarketer group "My Group"

    # Send now or schedule
    python -m textmarketer.run_textmarketer send --to 447700900001 --originator Shop --text "Hi"
    python -m textmarketer.run_textmarketer send --to 447700900001 --originator Shop \\
        --text "Hi" --schedule 2026-12-01T09:00:00+00:00

Environment Variables:
    TEXTMARKETER_USERNAME: API username (required)
    TEXTMARKETER_PASSWORD: API password (required)
    TEXTMARKETER_ENVIRONMENT: production (default) or sandbox
    TEXTMARKETER_TIMEOUT: Request timeout in seconds (default: 30)
"""

import argparse
import sys
from datetime import datetime
from typing import List, Optional

from loguru import logger

from textmarketer.domain.exceptions import TextMarketerError
from textmarketer.domain.interfaces import IEndpoint
from textmarketer.domain.models import (
    PhoneNumberCollection,
    QueuedMessage,
    ScheduledMessage,
    SendMessage,
    SentMessage,
)
from textmarketer.factory import AdapterFactory


def configure_logging(verbose: bool = False) -> None:
    """
    Configure loguru logger.

    Args:
        verbose: If True, set DEBUG level, otherwise INFO
    """
    logger.remove()  # Remove default handler
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level="DEBUG" if verbose else "INFO",
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="TextMarketer SMS gateway client",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("credits", help="Show remaining credits")

    account = subparsers.add_parser("account", help="Show account information")
    account.add_argument("--account-id", help="Sub-account ID (default: own account)")

    keyword = subparsers.add_parser("keyword", help="Check keyword availability")
    keyword.add_argument("keyword")

    subparsers.add_parser("groups", help="List send groups")

    group = subparsers.add_parser("group", help="Show a send group")
    group.add_argument("group", help="Group name or ID")

    send = subparsers.add_parser("send", help="Send or schedule a message")
    send.add_argument("--to", required=True, help="Comma-separated recipient numbers")
    send.add_argument("--originator", required=True)
    send.add_argument("--text", required=True)
    send.add_argument("--email", help="Reply email address")
    send.add_argument("--validity", type=int, help="Validity in hours (1-72)")
    send.add_argument("--check-stop", action="store_true", help="Skip numbers that replied STOP")
    send.add_argument("--schedule", help="ISO-8601 delivery time with offset")

    return parser.parse_args(argv)


def run_command(args: argparse.Namespace, endpoint: IEndpoint) -> None:
    """Execute the selected command against an endpoint."""
    if args.command == "credits":
        logger.info(f"Credits available: {endpoint.get_credit_count()}")

    elif args.command == "account":
        if args.account_id:
            account = endpoint.get_account_information_for_account_id(args.account_id)
        else:
            account = endpoint.get_account_information()
        logger.info(f"Account ID: {account.account_id}")
        logger.info(f"Company: {account.company_name}")
        logger.info(f"Created: {account.create_date.isoformat()}")
        logger.info(f"Credits: {account.credits}")

    elif args.command == "keyword":
        availability = endpoint.check_keyword_availability(args.keyword)
        logger.info(
            f"Keyword {args.keyword}: available={availability.available}, "
            f"recycled={availability.recycled}"
        )

    elif args.command == "groups":
        groups = endpoint.get_groups_list()
        logger.info(f"{len(groups)} group(s)")
        for summary in groups:
            stop = " [STOP]" if summary.is_stop_group else ""
            logger.info(f"  {summary.id}: {summary.name} ({summary.number_count} numbers){stop}")

    elif args.command == "group":
        group = endpoint.get_group_information(args.group)
        logger.info(f"Group {group.id}: {group.name} ({len(group.numbers)} numbers)")
        for number in group.numbers:
            logger.info(f"  {number}")

    elif args.command == "send":
        message = SendMessage(
            text=args.text,
            recipients=PhoneNumberCollection.from_csv(args.to),
            originator=args.originator,
            reply_email=args.email,
            validity_hours=args.validity,
            check_stop=args.check_stop,
        )
        if args.schedule:
            report = endpoint.send_scheduled_message(message, datetime.fromisoformat(args.schedule))
        else:
            report = endpoint.send_message(message)

        if isinstance(report, ScheduledMessage):
            logger.info(f"Scheduled: {report.schedule_id} ({report.credits_used} credits)")
        elif isinstance(report, (SentMessage, QueuedMessage)):
            logger.info(f"{report.status}: {report.message_id} ({report.credits_used} credits)")


def main(argv: Optional[List[str]] = None, endpoint: Optional[IEndpoint] = None) -> int:
    """
    Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_args(argv)

    configure_logging(verbose=args.verbose)

    try:
        if endpoint is None:
            endpoint = AdapterFactory.create_default()
        run_command(args, endpoint)
        return 0

    except TextMarketerError as e:
        logger.error(f"TextMarketer error: {e}")
        return 1
    except ValueError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
