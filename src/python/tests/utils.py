# Copyright 2024, xvacheck Contributors, All rights reserved.

import hashlib
import io
import tarfile
from typing import List, Tuple, Union

TarMember = Union[Tuple[str, bytes], tarfile.TarInfo]


class TestUtils:
    @staticmethod
    def sha1_hex(data: bytes) -> str:
        return hashlib.sha1(data).hexdigest()

    @staticmethod
    def block_pair(key: str, content: bytes) -> List[Tuple[str, bytes]]:
        """
        Data block entry followed by its matching checksum record
        :param key: block name, e.g. Ref:0/00000001
        :param content:
        :return:
        """
        return [(key, content), (key + ".checksum", TestUtils.sha1_hex(content).encode("ascii"))]

    @staticmethod
    def dir_member(name: str) -> tarfile.TarInfo:
        info = tarfile.TarInfo(name)
        info.type = tarfile.DIRTYPE
        info.mode = 0o755
        return info

    @staticmethod
    def symlink_member(name: str, target: str) -> tarfile.TarInfo:
        info = tarfile.TarInfo(name)
        info.type = tarfile.SYMTYPE
        info.linkname = target
        return info

    @staticmethod
    def write_xva(path: str, members: List[TarMember], mode: str = "w"):
        """
        Write a tar archive with the given members, in order
        Regular files are given as (name, content) tuples
        :param path:
        :param members:
        :param mode: tarfile write mode, e.g. "w:gz" for a compressed archive
        :return:
        """
        with tarfile.open(path, mode) as tar:
            for member in members:
                if isinstance(member, tarfile.TarInfo):
                    tar.addfile(member)
                else:
                    name, content = member
                    info = tarfile.TarInfo(name)
                    info.size = len(content)
                    tar.addfile(info, io.BytesIO(content))
