class ParseError(ValueError):
    """
    raised when interval or span text notation is malformed. For example missing separators,
    non-numeric bounds, negative positions or an end before the start
    """
    pass


class InvariantViolation(ValueError):
    """
    raised when an object is constructed directly with values that break its invariants

    for example a Range where the end is before the start
    """
    pass
