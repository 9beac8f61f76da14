"""Exceptions raised by the habits library."""


class HabitError(Exception):
    pass


class HabitConfigError(HabitError, ValueError):
    """Invalid input from the caller: bad frequency, inverted interval, empty window."""


class HabitNotFoundError(HabitError, LookupError):
    pass
