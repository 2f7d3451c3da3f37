import pytest
import torch
import torch.nn.functional as F

from spiral_nn.model.criterion import SoftmaxCrossEntropy
from spiral_nn.model.two_layer_model import TwoLayerModel


@pytest.fixture
def model(rng):
    return TwoLayerModel(input_size=2, hidden_size=10, output_size=3, rng=rng)


def test_parameter_shapes_and_init(model):
    assert model.weight1.shape == (2, 10)
    assert model.bias1.shape == (1, 10)
    assert model.weight2.shape == (10, 3)
    assert model.bias2.shape == (1, 3)
    assert torch.all(model.bias1 == 0)
    assert torch.all(model.bias2 == 0)
    assert model.weight1.dtype == torch.float64
    assert model.learnables() == [model.weight1, model.weight2, model.bias1, model.bias2]


def test_weights_are_roughly_standard_normal(rng):
    big = TwoLayerModel(input_size=200, hidden_size=200, output_size=3, rng=rng)
    w = big.weight1.detach()
    assert abs(w.mean().item()) < 0.05
    assert abs(w.std().item() - 1.0) < 0.05


def test_zero_input_gives_half_at_hidden_layer(model):
    hidden = model.hidden(torch.zeros(5, 2, dtype=torch.float64))
    torch.testing.assert_close(hidden, torch.full((5, 10), 0.5, dtype=torch.float64))


def test_zero_input_output_is_broadcast_bias_path(model):
    out = model(torch.zeros(4, 2, dtype=torch.float64))
    expected = (0.5 * model.weight2.sum(dim=0)).expand(4, 3)
    torch.testing.assert_close(out.detach(), expected.detach())


def test_forward_matches_manual_computation(model, rng):
    x = torch.from_numpy(rng.standard_normal((6, 2)))
    with torch.no_grad():
        model.bias1.fill_(0.3)
        model.bias2.fill_(-0.1)
        expected = torch.sigmoid(x @ model.weight1 + 0.3) @ model.weight2 - 0.1
        torch.testing.assert_close(model(x), expected)


def test_rejects_wrong_input_width(model):
    with pytest.raises(ValueError):
        model(torch.zeros(3, 5, dtype=torch.float64))


def test_cost_matches_cross_entropy_and_is_non_negative(rng):
    criterion = SoftmaxCrossEntropy()
    logits = torch.from_numpy(rng.standard_normal((50, 3)) * 10)
    classes = torch.from_numpy(rng.integers(3, size=50))
    expected = F.one_hot(classes, 3).to(torch.float64)

    cost = criterion(logits, expected)

    assert cost.item() >= 0
    torch.testing.assert_close(cost, F.cross_entropy(logits, classes))


def test_cost_is_finite_for_extreme_logits():
    criterion = SoftmaxCrossEntropy()
    logits = torch.tensor([[1000.0, -1000.0, 0.0]], dtype=torch.float64)
    expected = torch.tensor([[0.0, 1.0, 0.0]], dtype=torch.float64)
    cost = criterion(logits, expected)
    assert torch.isfinite(cost)
    assert cost.item() > 0


def test_cost_rejects_mismatched_shapes():
    with pytest.raises(ValueError):
        SoftmaxCrossEntropy()(torch.zeros(3, 3), torch.zeros(3, 2))
