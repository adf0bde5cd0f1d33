"""Command-line interface for stepshell."""

import argparse
import sys
from typing import List, Optional

from colorama import init as colorama_init
from dotenv import load_dotenv

from .constants import DENIAL_POLICIES
from .core.application import create_application
from .utils.logging import logger
from . import __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="stepshell: plan/action/observe/output shell agent driven by an LLM.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  stepshell                                   # Interactive mode
  stepshell "list files"                      # Run one query and exit
  stepshell --denial-policy terminate         # Answering 'n' ends the session
  stepshell --debug "create a snake game in snake.py"

Denial policies:
  report    - Denied commands are reported to the model as "Permission denied"
  terminate - Denying any command ends the session immediately
        """
    )

    parser.add_argument(
        'query',
        nargs='*',
        help="Initial query. If empty, enters interactive mode."
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'stepshell {__version__}'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help="Enable debug logging output"
    )

    parser.add_argument(
        '--config-dir',
        type=str,
        help="Custom configuration directory path"
    )

    parser.add_argument(
        '--config-summary',
        action='store_true',
        help="Show configuration summary and exit"
    )

    parser.add_argument(
        '--denial-policy',
        choices=DENIAL_POLICIES,
        help="Override the configured confirmation denial policy"
    )

    return parser


def main(args: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    colorama_init(autoreset=True)
    load_dotenv()

    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        app = create_application(
            config_dir=parsed_args.config_dir,
            debug=parsed_args.debug,
            denial_policy=parsed_args.denial_policy
        )
    except SystemExit:
        # Configuration templates were just generated
        return
    except Exception as e:
        logger.error(f"Failed to initialize stepshell: {e}")
        sys.exit(1)

    if parsed_args.config_summary:
        app.print_config_summary()
        return

    if parsed_args.query:
        success = app.run_single_task(" ".join(parsed_args.query))
        sys.exit(0 if success else 1)

    app.run_interactive_mode()
    logger.system("stepshell session ended.")


if __name__ == "__main__":
    main()
