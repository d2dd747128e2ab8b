# Copyright 2024, xvacheck Contributors, All rights reserved.

import argparse
import logging
import os
import sys
from enum import IntEnum
from typing import List, Optional

# my libs
from common import Context, Constants, Config, Args, AppError
from common import ConfigError, PersistError, ValidationResult
from common.log_manager import LogManager, LogManagerError, Verbosity
from xva import ArchiveValidator


class ExitCode(IntEnum):
    VALID = 0
    INVALID = 1
    ERROR = 2


class Xvacheck:
    """
    Command line tool that tests the integrity of an xva file
    Verbosity levels are:
    * 0: Only prints errors and "xva file is invalid" when needed
    * 1: Also prints "xva file is valid" when needed
    * 2: Prints each individual validation, this might create a lot of output
    """

    # This logger is used to print any exceptions caught at top module
    logger: logging.Logger | None = None

    def __init__(self, argv: List[str]):
        args = self._parse_args(argv)

        config = Xvacheck._load_config(args.config) if args.config else Config.default()

        # Command line takes precedence over config
        verbosity = args.verbosity if args.verbosity is not None else config.general.verbosity
        is_debug = args.debug or config.general.debug
        use_json = args.json_logs or config.general.use_json_logs

        ctx_args = Args()
        ctx_args.xva_path = args.xva
        ctx_args.verbosity = verbosity
        ctx_args.debug = is_debug
        ctx_args.log_dir = args.logdir

        LogManager.initialize(
            log_dir=args.logdir,
            log_level=Verbosity.to_log_level(verbosity),
            debug=is_debug,
            use_json=use_json,
        )
        logger = LogManager.get_main_logger()
        Xvacheck.logger = logger

        self.context = Context(logger=logger, config=config, args=ctx_args)
        self.context.print_to_log()

    def run(self) -> ExitCode:
        validator = ArchiveValidator(read_buffer_size=self.context.config.validation.read_buffer_size)
        validator.set_base_logger(self.context.logger)
        result = validator.validate(self.context.args.xva_path, self.context.args.verbosity)

        if result.status == ValidationResult.Status.ERROR:
            self.context.logger.error(str(result.error))
            return ExitCode.ERROR
        if result.status == ValidationResult.Status.INVALID:
            self.context.logger.error("xva file is invalid, reason: {}".format(result.reason))
            return ExitCode.INVALID
        self.context.logger.info("xva file is valid")
        return ExitCode.VALID

    @staticmethod
    def _parse_args(args):
        parser = argparse.ArgumentParser(description="Tests the integrity of an xva file")
        parser.add_argument(
            "-x", "--xva", default=Constants.DEFAULT_XVA_FILE, help="Path to the xva file (default: %(default)s)"
        )
        parser.add_argument(
            "-v",
            "--verbosity",
            type=Xvacheck._verbosity,
            default=None,
            help="Verbosity level: 0 = failures only, 1 = also success, 2 = every validation",
        )
        parser.add_argument("-c", "--config", help="Path to config file, created with defaults if missing")
        parser.add_argument("--logdir", help="Directory for log files")
        parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logs")
        parser.add_argument("--json-logs", action="store_true", help="Write logs as JSON")
        parser.add_argument(
            "--version", action="version", version="{} {}".format(Constants.SERVICE_NAME, Constants.VERSION)
        )
        return parser.parse_args(args)

    @staticmethod
    def _verbosity(value: str) -> int:
        try:
            verbosity = int(value)
        except ValueError as e:
            raise argparse.ArgumentTypeError("invalid verbosity: {!r}".format(value)) from e
        if verbosity < 0:
            raise argparse.ArgumentTypeError("verbosity must be zero or greater")
        return verbosity

    @staticmethod
    def _load_config(config_path: str) -> Config:
        """
        Load config from file
        A missing file is created with default values
        :param config_path:
        :return:
        """
        if os.path.isfile(config_path):
            return Config.from_file(config_path)
        config = Config.default()
        config.to_file(config_path)
        return config


def main(argv: Optional[List[str]] = None) -> int:
    try:
        xvacheck = Xvacheck(sys.argv[1:] if argv is None else argv)
        return xvacheck.run()
    except (ConfigError, PersistError) as e:
        sys.stderr.write("Error loading config: {}\n".format(str(e)))
        return ExitCode.ERROR
    except LogManagerError as e:
        sys.stderr.write("Error initializing logs: {}\n".format(str(e)))
        return ExitCode.ERROR
    except AppError:
        if Xvacheck.logger:
            Xvacheck.logger.exception("Caught exception")
        return ExitCode.ERROR


if __name__ == "__main__":
    if sys.hexversion < 0x030B0000:
        sys.exit("Python 3.11 or newer is required to run this program.")
    sys.exit(main())
