from typing import List

import numpy as np
import torch
import torch.nn as nn


class TwoLayerModel(nn.Module):

    """
    MLP: input_size -> [hidden_size, sigmoid] -> output_size (logits)
    Weights ~ N(0, 1) drawn from the given generator, biases zero.
    Loss: SoftmaxCrossEntropy (spiral_nn.model.criterion)
    """

    def __init__(self, input_size: int, hidden_size: int, output_size: int, rng: np.random.Generator):
        super().__init__()
        self.input_size = input_size
        self.hidden_size = hidden_size
        self.output_size = output_size

        self.weight1 = nn.Parameter(torch.from_numpy(rng.standard_normal((input_size, hidden_size))))
        self.bias1 = nn.Parameter(torch.zeros(1, hidden_size, dtype=torch.float64))
        self.weight2 = nn.Parameter(torch.from_numpy(rng.standard_normal((hidden_size, output_size))))
        self.bias2 = nn.Parameter(torch.zeros(1, output_size, dtype=torch.float64))

    def hidden(self, x: torch.Tensor) -> torch.Tensor:
        if x.dim() != 2 or x.shape[1] != self.input_size:
            raise ValueError(f"Expected input shape (B, {self.input_size}), got {tuple(x.shape)}")
        return torch.sigmoid(x @ self.weight1 + self.bias1)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.hidden(x) @ self.weight2 + self.bias2

    def learnables(self) -> List[nn.Parameter]:
        return [self.weight1, self.weight2, self.bias1, self.bias2]
