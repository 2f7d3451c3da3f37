import torch
import torch.nn as nn
import torch.nn.functional as F


class SoftmaxCrossEntropy(nn.Module):

    """
    Categorical cross-entropy against one-hot targets:

        cost = -mean(sum(expected * log(softmax(logits)), dim=1))

    log_softmax keeps the log finite for large logits.
    """

    def forward(self, logits: torch.Tensor, expected: torch.Tensor) -> torch.Tensor:
        if logits.shape != expected.shape:
            raise ValueError(f"Logits {tuple(logits.shape)} and expected {tuple(expected.shape)} must match")
        losses = (expected * F.log_softmax(logits, dim=1)).sum(dim=1)
        return -losses.mean()
