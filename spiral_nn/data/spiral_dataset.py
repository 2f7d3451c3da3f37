import math
from typing import Tuple

import numpy as np
import torch
from torch.utils.data import Dataset


MODES = ("train", "test")


def generate(dimension_num: int,
             class_num: int,
             sample_num: int,
             rng: np.random.Generator,
             mode: str = "train",
             noise: float = 0.2) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Synthesize points on `class_num` interleaved spirals.

    Both modes return `sample_num * class_num` rows:
      inputs: float64 tensor (N, dimension_num)
      labels: float64 one-hot tensor (N, class_num)

    "train" walks each spiral arm evenly (row = sample_num * class + i).
    "test" draws the class and the radius uniformly for every row.
    Only the first two input columns carry coordinates; the rest stay zero.

    Args:
        dimension_num: Number of input columns.
        class_num: Number of spiral arms / classes.
        sample_num: Points per class.
        rng: Generator every random draw is taken from.
        mode: "train" or "test".
        noise: Standard deviation of the angular jitter.
    """
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")
    if dimension_num <= 0 or class_num <= 0 or sample_num <= 0:
        raise ValueError(
            f"Sizes must be positive, got dimension_num={dimension_num}, "
            f"class_num={class_num}, sample_num={sample_num}")

    rows = sample_num * class_num
    inputs = np.zeros((rows, dimension_num), dtype=np.float64)
    labels = np.zeros((rows, class_num), dtype=np.float64)

    if mode == "train":
        for j in range(class_num):
            for i in range(sample_num):
                rate = i / sample_num
                theta = j * 4.0 + 4.0 * rate + rng.standard_normal() * noise
                _place(inputs, sample_num * j + i, rate, theta)
                labels[sample_num * j + i, j] = 1.0
    else:
        for ix in range(rows):
            cls = int(rng.integers(class_num))
            rate = rng.random()
            theta = cls * 4.0 + 4.0 * rate + rng.standard_normal() * noise
            _place(inputs, ix, rate, theta)
            labels[ix, cls] = 1.0

    return torch.from_numpy(inputs), torch.from_numpy(labels)


def _place(inputs: np.ndarray, ix: int, rate: float, theta: float) -> None:
    inputs[ix, 0] = rate * math.sin(theta)
    if inputs.shape[1] > 1:
        inputs[ix, 1] = rate * math.cos(theta)


class SpiralDataset(Dataset):

    """
    PyTorch Dataset over one synthesized spiral batch.

    The tensors are generated once at construction and served unchanged,
    so every epoch sees exactly the same samples.

    Args:
        dimension_num, class_num, sample_num, rng, mode, noise: see generate().
    """

    def __init__(self,
                 dimension_num: int,
                 class_num: int,
                 sample_num: int,
                 rng: np.random.Generator,
                 mode: str = "train",
                 noise: float = 0.2):

        self.dimension_num = dimension_num
        self.class_num = class_num
        self.mode = mode
        self.inputs, self.labels = generate(
            dimension_num, class_num, sample_num, rng, mode=mode, noise=noise)


    def __len__(self) -> int:
        return self.inputs.shape[0]


    def __getitem__(self, index: int):
        return self.inputs[index], self.labels[index]
