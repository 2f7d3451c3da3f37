from dataclasses import dataclass
import logging

import numpy as np
import torch

from spiral_nn.data.spiral_dataset import generate
from spiral_nn.errors import ExecutionError, OutputShapeError


@dataclass
class AccuracyReport:
    total: int
    correct: int

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else 0.0

    def __str__(self) -> str:
        return f"{self.total} total, {self.correct} correct, accuracy {self.accuracy:.5f}"


def check_accuracy(model: torch.nn.Module,
                   dimension_num: int,
                   class_num: int,
                   test_count: int,
                   rng: np.random.Generator,
                   noise: float = 0.2) -> AccuracyReport:
    """Classify freshly generated test points and count matches against their labels.

    The test batch holds `test_count * class_num` rows; the first `test_count`
    are compared. No gradient step is taken and the model's train/eval mode is
    restored afterwards.

    Raises:
        OutputShapeError: The model did not return a (rows, class_num) tensor.
        ExecutionError: The forward pass itself failed.
    """
    logger = logging.getLogger("spiral_nn.experiment.accuracy")

    inputs, expected = generate(dimension_num, class_num, test_count, rng, mode="test", noise=noise)

    was_training = model.training
    model.eval()
    try:
        with torch.no_grad():
            output = model(inputs)
    except (RuntimeError, ValueError) as e:
        raise ExecutionError(f"Forward pass failed during accuracy check: {e}") from e
    finally:
        model.train(was_training)

    if not isinstance(output, torch.Tensor):
        raise OutputShapeError(f"Expected a tensor, got {type(output).__name__}",
                               expected=torch.Tensor, actual=type(output))
    if tuple(output.shape) != tuple(expected.shape):
        raise OutputShapeError(f"Expected output shape {tuple(expected.shape)}, got {tuple(output.shape)}",
                               expected=tuple(expected.shape), actual=tuple(output.shape))

    actual_classes = output.argmax(dim=1)[:test_count]
    expected_classes = expected.argmax(dim=1)[:test_count]
    correct = int((actual_classes == expected_classes).sum().item())

    report = AccuracyReport(total=test_count, correct=correct)
    logger.info(str(report))
    return report
