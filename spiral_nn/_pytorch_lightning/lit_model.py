from typing import Any, Dict, Optional

import numpy as np
import torch
import pytorch_lightning as pl

from spiral_nn.errors import ConstructionError, ExecutionError
from spiral_nn.experiment.utils import import_class


class LitModel(pl.LightningModule):
    """Lightning wrapper running one manual gradient-descent step per batch."""

    def __init__(self, cfg, rng: np.random.Generator) -> None:
        super().__init__()
        self.cfg = cfg
        self.automatic_optimization = False

        self.net = self._create_model(cfg.model, cfg.data, rng)
        self.criterion = self._create_criterion(cfg.train.get("criterion", {}))

        self.cost_value: Optional[float] = None
        self.initial_cost: Optional[float] = None


    # ----- Lightning required methods -----

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        return self.net(x)

    def training_step(self, batch, _):
        if isinstance(batch, (list, tuple)) and len(batch) >= 2:
            x, expected = batch[0], batch[1]
        else:
            raise ValueError(f"Unsupported batch format: {type(batch)}")

        optimizer = self.optimizers()

        try:
            cost = self.criterion(self(x), expected)
        except (RuntimeError, ValueError) as e:
            raise ExecutionError(f"Forward pass failed at epoch {self.current_epoch}: {e}") from e
        if not torch.isfinite(cost):
            raise ExecutionError(f"Cost became non-finite at epoch {self.current_epoch}: {cost.item()}")

        self.manual_backward(cost)
        optimizer.step()
        optimizer.zero_grad()

        self.cost_value = cost.item()
        if self.initial_cost is None:
            self.initial_cost = self.cost_value
        return cost.detach()

    def configure_optimizers(self):
        return self._create_optimizer(self.cfg.train.optimizer, self.net.learnables())

    # ----- factories -----

    def _create_model(self, model_cfg: Dict[str, Any], data_cfg: Dict[str, Any], rng: np.random.Generator):
        cls_path = model_cfg.get("class")
        if not cls_path:
            raise ConstructionError(
                "cfg.model.class is required (e.g. 'spiral_nn.model.two_layer_model.TwoLayerModel').")
        cls = import_class(cls_path)
        return cls(
            input_size=data_cfg.dimension_num,
            output_size=data_cfg.class_num,
            rng=rng,
            **model_cfg.get("args", {}),
        )

    def _create_criterion(self, crit_cfg: Dict[str, Any]):
        cls_path = crit_cfg.get("class", "spiral_nn.model.criterion.SoftmaxCrossEntropy")
        try:
            cls = import_class(cls_path)
            return cls(**crit_cfg.get("args", {}))
        except (ImportError, AttributeError, TypeError, ValueError) as e:
            raise ConstructionError(f"Could not build cost function '{cls_path}': {e}") from e

    def _create_optimizer(self, optimizer_cfg: Dict[str, Any], parameters):
        cls = import_class(optimizer_cfg.get("class", "spiral_nn.solver.VanillaSGD"))
        return cls(parameters, **optimizer_cfg.get("args", {}))
