#!/usr/bin/env python3
"""
Terminal errors raised by the command-line layer.
"""


class StuntError(Exception):
    """Base class for errors that end the process with a printed message"""

    exit_code = 1


class ArgumentCountError(StuntError):
    """Fewer positional arguments than the command needs"""


class InputReadError(StuntError):
    """The input file could not be opened, read or decoded"""
