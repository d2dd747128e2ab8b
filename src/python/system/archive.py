# Copyright 2024, xvacheck Contributors, All rights reserved.

import logging
import tarfile
from typing import BinaryIO, Iterator

from common import AppError
from .entry import ArchiveEntry


class ArchiveReaderError(AppError):
    """
    Indicates that the archive could not be opened or read
    """

    pass


class _EntryStream:
    """
    Content stream of the current tar member
    Translates tar level failures into ArchiveReaderError
    """

    def __init__(self, name: str, fileobj: BinaryIO):
        self.__name = name
        self.__fileobj = fileobj

    def readinto(self, buffer) -> int:
        try:
            return self.__fileobj.readinto(buffer)
        except (tarfile.TarError, OSError, EOFError) as e:
            raise ArchiveReaderError("Error reading entry {}: {}".format(self.__name, str(e))) from e

    def read(self, size: int = -1) -> bytes:
        try:
            return self.__fileobj.read(size)
        except (tarfile.TarError, OSError, EOFError) as e:
            raise ArchiveReaderError("Error reading entry {}: {}".format(self.__name, str(e))) from e


class ArchiveReader:
    """
    Sequential reader of a tar formatted archive
    Entries are yielded in archive order, without seeking back. Compressed
    streams (gzip, bz2, xz) are decompressed transparently.

    Usage:
        with ArchiveReader(path) as reader:
            for entry in reader.entries():
                ...
    """

    def __init__(self, archive_path: str):
        self.__archive_path = archive_path
        self.__file: BinaryIO | None = None
        self.__tar: tarfile.TarFile | None = None
        self.logger = logging.getLogger(self.__class__.__name__)

    def set_base_logger(self, base_logger: logging.Logger):
        self.logger = base_logger.getChild(self.__class__.__name__)

    @property
    def archive_path(self) -> str:
        return self.__archive_path

    def open(self):
        try:
            self.__file = open(self.__archive_path, "rb")
        except OSError as e:
            raise ArchiveReaderError("Unable to open {}: {}".format(self.__archive_path, str(e))) from e
        try:
            # Stream mode: no seeking, members must be consumed in order
            self.__tar = tarfile.open(fileobj=self.__file, mode="r|*")
        except (tarfile.TarError, OSError, EOFError) as e:
            self.close()
            raise ArchiveReaderError("Unable to open {} as tar: {}".format(self.__archive_path, str(e))) from e
        self.logger.debug("Opened archive {}".format(self.__archive_path))

    def close(self):
        try:
            if self.__tar is not None:
                self.__tar.close()
        finally:
            self.__tar = None
            if self.__file is not None:
                self.__file.close()
                self.__file = None

    def __enter__(self) -> "ArchiveReader":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def entries(self) -> Iterator[ArchiveEntry]:
        """
        Yield the archive entries in order
        Iteration ends at the end of the stream; any other failure raises
        ArchiveReaderError
        """
        if self.__tar is None:
            raise ArchiveReaderError("Archive {} is not open".format(self.__archive_path))
        tar = self.__tar
        while True:
            try:
                member = tar.next()
            except (tarfile.TarError, OSError, EOFError) as e:
                raise ArchiveReaderError("Error reading {}: {}".format(self.__archive_path, str(e))) from e
            if member is None:
                return
            # Stream mode keeps every header read so far, only the current one is needed
            tar.members = []
            if member.isfile():
                try:
                    fileobj = tar.extractfile(member)
                except (tarfile.TarError, OSError) as e:
                    raise ArchiveReaderError("Error reading entry {}: {}".format(member.name, str(e))) from e
                yield ArchiveEntry(member.name, member.size, True, _EntryStream(member.name, fileobj))
            else:
                yield ArchiveEntry(member.name, member.size, False)
