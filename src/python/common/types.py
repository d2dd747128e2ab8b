# Copyright 2017, Inderpreet Singh, All rights reserved.


def overrides(interface_class):
    """
    Decorator to check that decorated method is a valid override
    Source: https://stackoverflow.com/a/8313042
    :param interface_class: The super class
    :return:
    """

    def overrider(method):
        assert method.__name__ in dir(interface_class), "{} does not override {}.{}".format(
            method.__name__, interface_class.__name__, method.__name__
        )
        return method

    return overrider
