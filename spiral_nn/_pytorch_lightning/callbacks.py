import logging
import time

import pytorch_lightning as pl


logger = logging.getLogger("spiral_nn.train.progress")


class ProgressReporter(pl.Callback):
    """Logs epoch, current cost and time since the previous report every `every_n_epochs` epochs."""

    def __init__(self, every_n_epochs: int = 10000) -> None:
        super().__init__()
        if every_n_epochs <= 0:
            raise ValueError(f"every_n_epochs must be positive, got {every_n_epochs}")
        self.every_n_epochs = every_n_epochs
        self._last = None

    def on_train_start(self, trainer, pl_module) -> None:
        self._last = time.perf_counter()

    def on_train_epoch_end(self, trainer, pl_module) -> None:
        epoch = trainer.current_epoch
        if epoch % self.every_n_epochs != 0:
            return
        now = time.perf_counter()
        elapsed = now - self._last
        self._last = now
        logger.info(f"loop:{epoch}, cost:{pl_module.cost_value}, time taken {elapsed:.6f}s")
