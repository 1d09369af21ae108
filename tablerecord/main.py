##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
Main entry point into TableRecord's command-line interface.
"""

import logging
import sys
import traceback

from tablerecord.cli.argparse_main import build_main_parser
from tablerecord.config.configfile import load_config
from tablerecord.log_formatter import setup_logging


LOG = logging.getLogger("tablerecord")


def main():
    """
    Entry point for the `tablerecord` command.

    Sets up the argument parser, loads the configuration, initializes logging,
    and executes the function attached to the chosen command.
    """
    parser = build_main_parser()
    if len(sys.argv) == 1:
        parser.print_help(sys.stdout)
        return 1
    args = parser.parse_args()

    config = load_config(args.config_dir)
    log_level = (args.level or config.logging.level).upper()
    setup_logging(logger=LOG, log_level=log_level, colors=bool(config.logging.colors))

    try:
        args.func(args, config)
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
