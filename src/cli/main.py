"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Configuration and logging setup
- Running the instance age pipeline and printing the report

Short flags: ``-n`` group names, ``-r`` region,
``-i`` exact count, ``-p`` percentage, ``-l`` launch times.
"""
import argparse
import os
import sys
from datetime import datetime, timezone
from typing import List, Optional

from src._version import __version__
from src.application.instance.service import InstanceAgeService
from src.cli.formatters import report
from src.config.manager import ConfigurationManager
from src.domain.core.exceptions import ConfigurationError, DomainException
from src.domain.instance.value_objects import RankDirection, SelectionPolicy
from src.helpers.logger import get_logger, setup_logging
from src.infrastructure.aws.aws_client import AWSClient
from src.infrastructure.exceptions import InfrastructureError


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def _percentage(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    # 0.0 means "not set"
    if number != 0.0 and not 0.0 < number <= 1.0:
        raise argparse.ArgumentTypeError(f"must be in (0, 1]: {value}")
    return number


def build_parser(direction: Optional[RankDirection] = None) -> argparse.ArgumentParser:
    """
    Build the argument parser.

    Args:
        direction: Fixed rank direction for the ``asg-oldest`` / ``asg-newest``
            entry points. When None, ``--newest`` / ``--oldest`` choose it.
    """
    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]),
        description="List Auto Scaling group instances ordered by age",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                          # Every ASG instance, oldest first
  %(prog)s -n web,worker -i 3       # Three oldest instances of two groups
  %(prog)s -n web -p 0.25 -l        # Oldest quarter of a group, with launch times
        """
    )

    parser.add_argument('-n', dest='group_names', default='',
                        help='Comma-separated autoscaling group names (no spaces). '
                             'All groups when omitted')
    parser.add_argument('-r', dest='region', default=None,
                        help='AWS region (default: from configuration, us-east-1)')
    parser.add_argument('-i', dest='count', type=_non_negative_int, default=0,
                        help='Number of instances to print (has priority over -p)')
    parser.add_argument('-p', dest='percentage', type=_percentage, default=0.0,
                        help='Fraction of instances to print, in (0, 1]. '
                             'At least one instance is printed')
    parser.add_argument('-l', dest='show_launch_time', action='store_true',
                        help='Print the launch time of each instance')

    if direction is None:
        order = parser.add_mutually_exclusive_group()
        order.add_argument('--oldest', dest='direction', action='store_const',
                           const=RankDirection.OLDEST_FIRST,
                           help='Oldest instances first (default)')
        order.add_argument('--newest', dest='direction', action='store_const',
                           const=RankDirection.NEWEST_FIRST,
                           help='Newest instances first')
        parser.set_defaults(direction=RankDirection.OLDEST_FIRST)
    else:
        parser.set_defaults(direction=direction)

    parser.add_argument('--config', help='Configuration file path (JSON or YAML)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None, help='Set logging level')
    parser.add_argument('--format', choices=['text', 'json'], default='text',
                        help='Output format')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def parse_args(argv: Optional[List[str]] = None,
               direction: Optional[RankDirection] = None) -> argparse.Namespace:
    """Parse command line arguments and resolve the selection policy."""
    parser = build_parser(direction)
    args = parser.parse_args(argv)
    try:
        args.policy = SelectionPolicy.from_flags(args.count, args.percentage)
    except DomainException as e:
        parser.error(str(e))
    return args


def main(argv: Optional[List[str]] = None,
         direction: Optional[RankDirection] = None) -> int:
    """
    Run the CLI.

    Returns:
        Process exit status: 0 on success (including an empty fleet),
        1 on configuration or AWS errors, 130 when interrupted
    """
    args = parse_args(argv, direction)
    try:
        return _run(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130


def _run(args: argparse.Namespace) -> int:
    try:
        config_manager = ConfigurationManager(args.config)
        config_manager.apply_overrides({
            'aws': {'region': args.region},
            'logging': {'level': args.log_level},
        })
        app_config = config_manager.app_config
        setup_logging(app_config.logging)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger = get_logger(__name__)

    # every age in this run is measured against this instant
    now = datetime.now(timezone.utc)
    region = app_config.aws.region

    try:
        aws_client = AWSClient(region_name=region, config=app_config.aws)
        service = InstanceAgeService(membership_port=aws_client, instance_port=aws_client)
        selected = service.find_instances(
            region=region,
            group_names=args.group_names,
            direction=args.direction,
            policy=args.policy,
            now=now,
        )
    except InfrastructureError as e:
        logger.debug("AWS request failed", operation=getattr(e, "operation", None),
                     error_code=getattr(e, "error_code", None))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report(selected, show_launch_time=args.show_launch_time, output_format=args.format)
    return 0


def cli() -> None:
    """Console entry point."""
    sys.exit(main())


def oldest_cli() -> None:
    """Console entry point that always ranks oldest first."""
    sys.exit(main(direction=RankDirection.OLDEST_FIRST))


def newest_cli() -> None:
    """Console entry point that always ranks newest first."""
    sys.exit(main(direction=RankDirection.NEWEST_FIRST))


if __name__ == "__main__":
    cli()
