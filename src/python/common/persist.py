# Copyright 2017, Inderpreet Singh, All rights reserved.

from abc import ABC, abstractmethod
from typing import Type, TypeVar

from .error import AppError


class PersistError(AppError):
    """
    Exception indicating persist loading/saving error
    """

    pass


T_Persist = TypeVar("T_Persist", bound="Persist")


class Persist(ABC):
    """
    Defines a class that can be persisted to and loaded from a file
    """

    @classmethod
    def from_file(cls: Type[T_Persist], file_path: str) -> T_Persist:
        """
        Load the persist from file
        :param file_path:
        :return:
        """
        try:
            with open(file_path, "r") as f:
                content = f.read()
        except OSError as e:
            raise PersistError("Error reading {} - {}".format(file_path, str(e))) from e
        return cls.from_str(content)

    def to_file(self, file_path: str):
        """
        Save the persist to file
        :param file_path:
        :return:
        """
        try:
            with open(file_path, "w") as f:
                f.write(self.to_str())
        except OSError as e:
            raise PersistError("Error writing {} - {}".format(file_path, str(e))) from e

    @classmethod
    @abstractmethod
    def from_str(cls: Type[T_Persist], content: str) -> T_Persist:
        pass

    @abstractmethod
    def to_str(self) -> str:
        pass
