# Copyright 2024, xvacheck Contributors, All rights reserved.

from .entry import ArchiveEntry
from .archive import ArchiveReader, ArchiveReaderError
