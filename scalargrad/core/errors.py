# scalargrad/core/errors.py


class ScalarGradError(RuntimeError):
    """Base class for misuse of the graph API (programmer errors)."""


class StaleValueError(ScalarGradError):
    """A Value handle refers to a tape that has been reset since it was created."""


class TapeMismatchError(ScalarGradError):
    """An operator received operands recorded on different tapes."""
