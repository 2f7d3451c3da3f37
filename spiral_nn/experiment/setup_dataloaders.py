"""
DataLoader setup functionality for experiments.
"""
import logging

import numpy as np
from torch.utils.data import DataLoader

from spiral_nn.data.spiral_dataset import SpiralDataset


def setup_dataloaders(data_cfg, rng: np.random.Generator):
    """Create the full-batch training DataLoader over freshly synthesized spiral data.

    The loader yields the whole training set as a single batch, in generation
    order, so the same tensors are fed on every epoch. Test data is drawn
    per accuracy check by run_testing.check_accuracy.

    Args:
        data_cfg: The `data` section of the config (dimension_num, class_num,
                  sample_num, noise).
        rng: Generator used for synthesis.

    Returns:
        Dictionary of dataloaders organized by split name
    """
    logger = logging.getLogger("spiral_nn.experiment.setup_dataloaders")

    dataset = SpiralDataset(
        dimension_num=data_cfg.dimension_num,
        class_num=data_cfg.class_num,
        sample_num=data_cfg.sample_num,
        rng=rng,
        mode="train",
        noise=data_cfg.get("noise", 0.2),
    )
    train_loader = DataLoader(dataset, batch_size=len(dataset), shuffle=False)
    logger.info(f"Created train dataloader: {len(dataset)} samples in one batch")

    return {"train": train_loader}
