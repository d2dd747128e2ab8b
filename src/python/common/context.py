# Copyright 2017, Inderpreet Singh, All rights reserved.

import logging
import collections

# my libs
from .config import Config


class Args:
    """
    Container for args
    These are settings that aren't part of config but still needed by
    sub-components
    """

    def __init__(self):
        self.xva_path = None
        self.verbosity = None
        self.debug = None
        self.log_dir = None

    def as_dict(self) -> dict:
        dct = collections.OrderedDict()
        dct["xva_path"] = str(self.xva_path)
        dct["verbosity"] = str(self.verbosity)
        dct["debug"] = str(self.debug)
        dct["log_dir"] = str(self.log_dir)
        return dct


class Context:
    """
    Stores contextual information for the entire application
    """

    def __init__(self, logger: logging.Logger, config: Config, args: Args):
        """
        Primary constructor to construct the top-level context
        """
        self.logger = logger
        self.config = config
        self.args = args

    def print_to_log(self):
        self.logger.debug("Config:")
        config_dict = self.config.as_dict()
        for section in config_dict.keys():
            for option in config_dict[section].keys():
                value = config_dict[section][option]
                self.logger.debug("  {}.{}: {}".format(section, option, value))

        self.logger.debug("Args:")
        for name, value in self.args.as_dict().items():
            self.logger.debug("  {}: {}".format(name, value))
