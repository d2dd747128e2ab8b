# Copyright 2017, Inderpreet Singh, All rights reserved.

import configparser
from io import StringIO
import collections
from abc import ABC
from typing import Type, TypeVar, Callable, Any

from .constants import Constants
from .error import AppError
from .persist import Persist, PersistError
from .types import overrides


def strtobool(val: str) -> bool:
    """
    Convert a string representation of truth to True or False.

    True values are: 'y', 'yes', 't', 'true', 'on', '1'
    False values are: 'n', 'no', 'f', 'false', 'off', '0'
    """
    val = val.lower().strip()
    if val in ("y", "yes", "t", "true", "on", "1"):
        return True
    elif val in ("n", "no", "f", "false", "off", "0"):
        return False
    else:
        raise ValueError(f"Invalid boolean value: {val!r}")


class ConfigError(AppError):
    """
    Exception indicating a bad config value
    """

    pass


InnerConfigType = dict[str, str]
OuterConfigType = dict[str, InnerConfigType]


T = TypeVar("T", bound="InnerConfig")


class Converters:
    @staticmethod
    def int(cls: type[T], name: str, value: str) -> int:
        if not value:
            raise ConfigError("Bad config: {}.{} is empty".format(cls.__name__, name))
        try:
            val = int(value)
        except ValueError as e:
            raise ConfigError(
                "Bad config: {}.{} ({}) must be an integer value".format(cls.__name__, name, value)
            ) from e
        return val

    @staticmethod
    def bool(cls: type[T], name: str, value: str) -> bool:
        if not value:
            raise ConfigError("Bad config: {}.{} is empty".format(cls.__name__, name))
        try:
            val = strtobool(value)
        except ValueError as e:
            raise ConfigError("Bad config: {}.{} ({}) must be a boolean value".format(cls.__name__, name, value)) from e
        return val


class Checkers:
    @staticmethod
    def null(_: type[T], __: str, value: Any) -> Any:
        return value

    @staticmethod
    def int_non_negative(cls: type[T], name: str, value: int) -> int:
        if value < 0:
            raise ConfigError("Bad config: {}.{} ({}) must be zero or greater".format(cls.__name__, name, value))
        return value

    @staticmethod
    def int_bounded(min_val: int, max_val: int) -> Callable:
        """Factory: returns a checker that enforces min_val <= value <= max_val."""
        def _checker(cls: type[T], name: str, value: int) -> int:
            if value < min_val or value > max_val:
                raise ConfigError(
                    "Bad config: {}.{} ({}) must be between {} and {}".format(
                        cls.__name__, name, value, min_val, max_val
                    )
                )
            return value
        return _checker


class InnerConfig(ABC):
    """
    Abstract base class for a config section
    Config values are exposed as properties. They must be set using their native type.
    Converters turn the string representation into the native type; they are
    only used when creating config from a dict.
    Checkers perform a boundary check on the native type value.
    """

    class PropMetadata:
        """Tracks property metadata"""

        def __init__(self, checker: Callable, converter: Callable):
            self.checker = checker
            self.converter = converter

    # Maps every config property (of every section) to its metadata, in order of creation
    __prop_addon_map: collections.OrderedDict[property, "InnerConfig.PropMetadata"] = collections.OrderedDict()

    @classmethod
    def _create_property(cls, name: str, checker: Callable, converter: Callable) -> property:
        # noinspection PyProtectedMember
        prop = property(fget=lambda s: s._get_property(name), fset=lambda s, v: s._set_property(name, v, checker))
        InnerConfig.__prop_addon_map[prop] = InnerConfig.PropMetadata(checker=checker, converter=converter)
        return prop

    def _get_property(self, name: str) -> Any:
        return getattr(self, "__" + name, None)

    def _set_property(self, name: str, value: Any, checker: Callable):
        # Allow setting to None for the first time
        if value is None and self._get_property(name) is None:
            setattr(self, "__" + name, None)
        else:
            setattr(self, "__" + name, checker(self.__class__, name, value))

    @classmethod
    def from_dict(cls: Type[T], config_dict: InnerConfigType) -> T:
        """
        Construct and return inner config from a dict
        Dict values can be either native types, or str representations
        :param config_dict:
        :return:
        """
        config_dict = dict(config_dict)  # copy that we can modify

        # noinspection PyCallingNonCallable
        inner_config = cls()
        property_map = {p: getattr(cls, p) for p in dir(cls) if isinstance(getattr(cls, p), property)}
        for name in property_map:
            if name not in config_dict:
                raise ConfigError("Missing config: {}.{}".format(cls.__name__, name))
            inner_config.set_property(name, config_dict[name])
            del config_dict[name]

        extra_keys = config_dict.keys()
        if extra_keys:
            raise ConfigError("Unknown config: {}.{}".format(cls.__name__, next(iter(extra_keys))))

        return inner_config

    def as_dict(self) -> InnerConfigType:
        """
        Return the dict representation of the inner config
        :return:
        """
        config_dict = collections.OrderedDict()
        cls = self.__class__
        my_property_to_name_map = {getattr(cls, p): p for p in dir(cls) if isinstance(getattr(cls, p), property)}
        # The prop map holds the properties of all sections, so filter down to ours
        for prop in InnerConfig.__prop_addon_map.keys():
            if prop in my_property_to_name_map:
                name = my_property_to_name_map[prop]
                config_dict[name] = getattr(self, name)
        return config_dict

    def set_property(self, name: str, value: Any):
        """
        Set a property dynamically
        Do a str conversion of the value, if necessary
        :param name:
        :param value:
        :return:
        """
        cls = self.__class__
        prop_addon = InnerConfig.__prop_addon_map[getattr(cls, name)]
        native_value = prop_addon.converter(cls, name, value) if type(value) is str else value
        # noinspection PyProtectedMember
        self._set_property(name, native_value, prop_addon.checker)


# Useful aliases
IC = InnerConfig
# noinspection PyProtectedMember
PROP = InnerConfig._create_property


class Config(Persist):
    """
    Configuration registry
    """

    class General(IC):
        debug = PROP("debug", Checkers.null, Converters.bool)
        # Verbosity of the validation output: 0 = failures only, 1 = also success, 2+ = every entry
        verbosity = PROP("verbosity", Checkers.int_non_negative, Converters.int)
        use_json_logs = PROP("use_json_logs", Checkers.null, Converters.bool)

        def __init__(self):
            super().__init__()
            self.debug = None
            self.verbosity = None
            self.use_json_logs = None

    class Validation(IC):
        # Size of the reusable read buffer in bytes (default: 1048576 = one xva block)
        read_buffer_size = PROP(
            "read_buffer_size", Checkers.int_bounded(64 * 1024, 1024 * 1024 * 1024), Converters.int
        )

        def __init__(self):
            super().__init__()
            self.read_buffer_size = None

    __DEFAULT_VALIDATION = {
        "read_buffer_size": str(Constants.XVA_BLOCK_SIZE_IN_BYTES),
    }

    def __init__(self):
        self.general = Config.General()
        self.validation = Config.Validation()

    @staticmethod
    def default() -> "Config":
        """
        Create a config with default values
        :return:
        """
        config = Config()
        config.general.debug = False
        config.general.verbosity = 0
        config.general.use_json_logs = False
        config.validation = Config.Validation.from_dict(Config.__DEFAULT_VALIDATION)
        return config

    @staticmethod
    def _check_section(dct: OuterConfigType, name: str) -> InnerConfigType:
        if name not in dct:
            raise ConfigError("Missing config section: {}".format(name))
        val = dct[name]
        del dct[name]
        return val

    @staticmethod
    def _check_empty_outer_dict(dct: OuterConfigType):
        extra_keys = dct.keys()
        if extra_keys:
            raise ConfigError("Unknown section: {}".format(next(iter(extra_keys))))

    @classmethod
    @overrides(Persist)
    def from_str(cls, content: str) -> "Config":
        config_parser = configparser.ConfigParser()
        try:
            config_parser.read_string(content)
        except configparser.Error as e:
            raise PersistError("Error parsing Config - {}: {}".format(type(e).__name__, str(e))) from e
        config_dict: dict[str, dict[str, str]] = {}
        for section in config_parser.sections():
            config_dict[section] = {}
            for option in config_parser.options(section):
                config_dict[section][option] = config_parser.get(section, option)
        return Config.from_dict(config_dict)

    @overrides(Persist)
    def to_str(self) -> str:
        config_parser = configparser.ConfigParser()
        config_dict = self.as_dict()
        for section in config_dict:
            config_parser.add_section(section)
            section_dict = config_dict[section]
            for key in section_dict:
                config_parser.set(section, key, str(section_dict[key]))
        str_io = StringIO()
        config_parser.write(str_io)
        return str_io.getvalue()

    @staticmethod
    def from_dict(config_dict: OuterConfigType) -> "Config":
        config_dict = dict(config_dict)  # copy that we can modify
        config = Config()

        config.general = Config.General.from_dict(Config._check_section(config_dict, "General"))
        # Validation section is optional
        if "Validation" in config_dict:
            config.validation = Config.Validation.from_dict(Config._check_section(config_dict, "Validation"))
        else:
            config.validation = Config.Validation.from_dict(Config.__DEFAULT_VALIDATION)

        Config._check_empty_outer_dict(config_dict)
        return config

    def as_dict(self) -> OuterConfigType:
        # Use an ordered dict to maintain section order
        config_dict = collections.OrderedDict()
        config_dict["General"] = self.general.as_dict()
        config_dict["Validation"] = self.validation.as_dict()
        return config_dict
