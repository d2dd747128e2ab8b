# Copyright 2017, Inderpreet Singh, All rights reserved.


class Constants:
    """
    POD class to hold shared constants
    """

    SERVICE_NAME = "xvacheck"
    VERSION = "1.0.0"
    MAX_LOG_SIZE_IN_BYTES = 10 * 1024 * 1024  # 10 MB
    LOG_BACKUP_COUNT = 10
    DEFAULT_XVA_FILE = "backup.xva"
    # Nominal size of an xva data block
    XVA_BLOCK_SIZE_IN_BYTES = 1024 * 1024
