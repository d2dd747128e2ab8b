# Copyright 2017, Inderpreet Singh, All rights reserved.


class AppError(Exception):
    """
    Exception indicating an error
    """

    pass
