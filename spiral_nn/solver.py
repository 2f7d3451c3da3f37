"""
Vanilla gradient descent with batch-size gradient scaling.
"""
from typing import Optional

import torch
from torch.optim import Optimizer


class VanillaSGD(Optimizer):
    """Plain gradient descent: ``w -= lr * g``.

    The gradient is first divided by ``batch_size`` (a scaling factor only,
    the data is never split), then optionally clipped to ``[-clip, clip]``,
    then L1 (``l1 * sign(w)``) and L2 (``l2 * w``) terms are added.

    Args:
        params: Parameters to update.
        lr: Learning rate.
        batch_size: Divisor applied to every gradient.
        clip: Absolute gradient bound, ``None`` to disable.
        l1: L1 regularisation strength.
        l2: L2 regularisation strength.
    """

    def __init__(self, params, lr: float = 1.0, batch_size: float = 1.0,
                 clip: Optional[float] = None, l1: float = 0.0, l2: float = 0.0):
        if lr <= 0.0:
            raise ValueError(f"Invalid learning rate: {lr}")
        if batch_size <= 0:
            raise ValueError(f"Invalid batch size: {batch_size}")
        if clip is not None and clip <= 0.0:
            raise ValueError(f"Invalid clip value: {clip}")
        defaults = dict(lr=lr, batch_size=float(batch_size), clip=clip, l1=l1, l2=l2)
        super().__init__(params, defaults)

    @torch.no_grad()
    def step(self, closure=None):
        loss = None
        if closure is not None:
            with torch.enable_grad():
                loss = closure()

        for group in self.param_groups:
            for p in group["params"]:
                if p.grad is None:
                    continue
                g = p.grad / group["batch_size"]
                if group["clip"] is not None:
                    g = g.clamp(-group["clip"], group["clip"])
                if group["l1"]:
                    g = g + group["l1"] * torch.sign(p)
                if group["l2"]:
                    g = g + group["l2"] * p
                p.sub_(g, alpha=group["lr"])

        return loss
