"""Command runner: post standard input to a Slack channel."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, TextIO, Union

from post_stdin_to_slack.config import (
    ConfigError,
    config_path_for,
    load_config,
    log_path_for,
    write_default_config,
)
from post_stdin_to_slack.logging_setup import (
    build_bootstrap_logger,
    build_logger,
    close_logger,
    log_fatal,
)
from post_stdin_to_slack.message import (
    DEFAULT_POST_TYPE,
    POST_TYPES,
    build_post,
    color_for,
)
from post_stdin_to_slack.slack_notifier import WebhookPoster, WebhookPostError
from post_stdin_to_slack.stdin_reader import read_input, stdin_lines

RULE = "-" * 60


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line flags."""
    parser = argparse.ArgumentParser(
        description="Post standard input to a Slack channel."
    )
    parser.add_argument("-message", "--message", default="", help="Post Message.")
    parser.add_argument(
        "-type",
        "--type",
        dest="post_type",
        default=DEFAULT_POST_TYPE,
        help=f"Post Type. {{ {' | '.join(POST_TYPES)} }}",
    )
    return parser.parse_args(argv)


def run(
    argv: Optional[List[str]],
    config_path: Union[str, Path],
    log_path: Union[str, Path],
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    """Post standard input to Slack.

    Args:
        argv: Command line flags, without the program name
        config_path: Config file to load, created with defaults if missing
        log_path: Log file used when logging to file is enabled
        stdin: Input stream, standard input when omitted
        stdout: Console stream for log lines, standard output when omitted

    Returns:
        Process exit code
    """
    config_path = Path(config_path)
    name = config_path.stem

    bootstrap = build_bootstrap_logger()
    try:
        if not config_path.exists():
            try:
                write_default_config(config_path)
            except ConfigError as e:
                log_fatal(bootstrap, e)
                return 1
            bootstrap.info(RULE)
            bootstrap.info(
                f"Creating '{config_path}' has finished successfully. "
                "At First, please edit this file."
            )
            bootstrap.info(RULE)
            return 0

        try:
            config = load_config(config_path)
        except ConfigError as e:
            log_fatal(bootstrap, e)
            return 1

        try:
            logger = build_logger(config, log_path, stream=stdout)
        except OSError as e:
            log_fatal(bootstrap, f"Cannot open log file '{log_path}': {e}")
            return 1
    finally:
        close_logger(bootstrap)

    try:
        logger.info(RULE)
        logger.info(f"'{name}' is starting.")
        logger.info(RULE)

        args = parse_args(argv)
        logger.debug(f"Setting post message: {args.message}")
        logger.debug(f"Setting post type: {args.post_type}")
        logger.debug(f"Setting post color: {color_for(args.post_type)}")

        logger.info("The following has been entered as standard input.")
        text = read_input(stdin if stdin is not None else stdin_lines())
        logger.info(text)

        slack_post = build_post(config, args.message, args.post_type, text)
        try:
            WebhookPoster(config, logger).post(slack_post)
        except WebhookPostError as e:
            log_fatal(logger, e)
            return 1

        logger.info(RULE)
        logger.info(f"'{name}' has finished successfully.")
        logger.info(RULE)
        return 0
    finally:
        close_logger(logger)


def main() -> None:
    """Run with the config and log files that sit beside this program."""
    program_path = sys.argv[0]
    sys.exit(
        run(sys.argv[1:], config_path_for(program_path), log_path_for(program_path))
    )


if __name__ == "__main__":
    main()
