from dataclasses import dataclass
from typing import Optional
import logging

import numpy as np
import pytorch_lightning as pl
from omegaconf import DictConfig, OmegaConf

from spiral_nn.errors import ExecutionError, SpiralNNError
from spiral_nn.experiment.setup_dataloaders import setup_dataloaders
from spiral_nn.experiment.utils import import_class
from spiral_nn._pytorch_lightning.lit_model import LitModel


@dataclass
class TrainingResult:
    epochs: int
    initial_cost: Optional[float]
    final_cost: Optional[float]


def run_training(cfg: DictConfig, model: LitModel, rng: np.random.Generator) -> TrainingResult:
    """Run the training phase on one synthesized dataset reused for every epoch."""
    logger = logging.getLogger("spiral_nn.experiment")

    # Training data is generated once, not per epoch
    logger.info("Creating dataloaders...")
    train_loader = setup_dataloaders(cfg.data, rng)["train"]

    logger.info("Creating PyTorch Lightning Trainer...")

    # Create trainer config (convert to dict to avoid struct mode issues)
    trainer_cfg = OmegaConf.to_container(cfg.trainer, resolve=True)
    trainer_cfg["max_epochs"] = cfg.train.max_epochs

    callbacks = []
    if "callbacks" in trainer_cfg:
        callback_configs = trainer_cfg.pop("callbacks")
        for callback_cfg in callback_configs:
            if "class" in callback_cfg:
                callback_cls = import_class(callback_cfg["class"])
                callback_instance = callback_cls(**callback_cfg.get("args", {}))
                callbacks.append(callback_instance)
                logger.info(f"Created callback: {callback_cfg['class']}")

    trainer = pl.Trainer(logger=False, callbacks=callbacks if callbacks else None, **trainer_cfg)

    logger.info(f"Starting training for {cfg.train.max_epochs} epochs...")
    try:
        trainer.fit(model=model, train_dataloaders=train_loader)
    except SpiralNNError:
        raise
    except Exception as e:
        raise ExecutionError(f"Training run failed: {e}") from e

    result = TrainingResult(
        epochs=trainer.current_epoch,
        initial_cost=model.initial_cost,
        final_cost=model.cost_value,
    )
    logger.info(f"Training finished after {result.epochs} epochs: "
                f"cost {result.initial_cost} -> {result.final_cost}")
    return result
