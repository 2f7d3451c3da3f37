import logging

import pytest
import torch

from spiral_nn.errors import ExecutionError, OutputShapeError
from spiral_nn.experiment.run_testing import AccuracyReport, check_accuracy
from spiral_nn.experiment.utils import make_rng
from spiral_nn.model.two_layer_model import TwoLayerModel


class ConstantModel(torch.nn.Module):
    """Always predicts class `cls`."""

    def __init__(self, cls, class_num=3):
        super().__init__()
        self.cls = cls
        self.class_num = class_num

    def forward(self, x):
        out = torch.zeros(x.shape[0], self.class_num, dtype=torch.float64)
        out[:, self.cls] = 1.0
        return out


class WrongShapeModel(torch.nn.Module):
    def forward(self, x):
        return torch.zeros(x.shape[0], 2)


class NotATensorModel(torch.nn.Module):
    def forward(self, x):
        return x.tolist()


class BrokenModel(torch.nn.Module):
    def forward(self, x):
        raise RuntimeError("mat1 and mat2 shapes cannot be multiplied")


def test_report_format():
    report = AccuracyReport(total=100, correct=37)
    assert report.accuracy == pytest.approx(0.37)
    assert str(report) == "100 total, 37 correct, accuracy 0.37000"


def test_untrained_model_is_near_chance():
    accuracies = []
    for seed in range(20):
        rng = make_rng(seed)
        model = TwoLayerModel(2, 10, 3, rng)
        accuracies.append(check_accuracy(model, 2, 3, 100, rng).accuracy)

    mean = sum(accuracies) / len(accuracies)
    assert 0.15 <= mean <= 0.50


def test_constant_predictions_count_only_that_class():
    report = check_accuracy(ConstantModel(1), 2, 3, 300, make_rng(5))
    # the first test_count rows are compared against a class drawn uniformly
    assert report.total == 300
    assert 60 <= report.correct <= 140


def test_same_rng_state_gives_same_result():
    model = TwoLayerModel(2, 10, 3, make_rng(0))
    first = check_accuracy(model, 2, 3, 100, make_rng(99))
    second = check_accuracy(model, 2, 3, 100, make_rng(99))
    assert first == second


def test_restores_training_mode(rng):
    model = TwoLayerModel(2, 10, 3, rng)
    model.train()
    check_accuracy(model, 2, 3, 10, rng)
    assert model.training


def test_logs_report(rng, caplog):
    with caplog.at_level(logging.INFO, logger="spiral_nn.experiment.accuracy"):
        report = check_accuracy(TwoLayerModel(2, 10, 3, rng), 2, 3, 100, rng)
    assert str(report) in caplog.text


def test_wrong_output_shape_is_reported(rng):
    with pytest.raises(OutputShapeError) as excinfo:
        check_accuracy(WrongShapeModel(), 2, 3, 10, rng)
    assert excinfo.value.actual == (30, 2)
    assert excinfo.value.expected == (30, 3)


def test_non_tensor_output_is_reported(rng):
    with pytest.raises(OutputShapeError):
        check_accuracy(NotATensorModel(), 2, 3, 10, rng)


def test_forward_failure_is_an_execution_error(rng):
    with pytest.raises(ExecutionError):
        check_accuracy(BrokenModel(), 2, 3, 10, rng)
