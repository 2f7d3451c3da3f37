"""
Error taxonomy for spiral_nn.

ConstructionError and ExecutionError are fatal for the run. OutputShapeError
is raised by the evaluator when the model output cannot be inspected; callers
may handle it, the entry point treats it as fatal.
"""


class SpiralNNError(Exception):
    """Base class for all spiral_nn errors."""


class ConstructionError(SpiralNNError):
    """Raised when the model, cost function or seed cannot be set up."""


class ExecutionError(SpiralNNError):
    """Raised when a forward/backward pass fails or produces a non-finite cost."""


class OutputShapeError(SpiralNNError, ValueError):
    """Raised when model output is not a tensor of the expected shape."""

    def __init__(self, message: str, expected=None, actual=None) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual
