# Copyright 2024, xvacheck Contributors, All rights reserved.

from typing import BinaryIO


class ArchiveEntry:
    """
    Represents one entry of an archive stream
    The reader is bound to exactly size bytes and is only usable until the
    stream moves on to the next entry
    """

    def __init__(self, name: str, size: int, is_regular: bool, reader: BinaryIO | None = None):
        if size < 0:
            raise ValueError("Entry size must be zero or greater")
        self.__name = name
        self.__size = size  # in bytes
        self.__is_regular = is_regular
        self.__reader = reader

    def __repr__(self):
        return "ArchiveEntry(name={!r}, size={}, is_regular={})".format(self.__name, self.__size, self.__is_regular)

    @property
    def name(self) -> str:
        return self.__name

    @property
    def size(self) -> int:
        return self.__size

    @property
    def is_regular(self) -> bool:
        return self.__is_regular

    @property
    def reader(self) -> BinaryIO:
        if self.__reader is None:
            raise TypeError("Entry {} has no content".format(self.__name))
        return self.__reader
