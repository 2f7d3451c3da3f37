import logging
import sys

import hydra
from omegaconf import DictConfig

from spiral_nn.errors import SpiralNNError


logger = logging.getLogger("spiral_nn.main")


@hydra.main(config_path="conf", config_name="main", version_base=None)
def run(cfg: DictConfig) -> None:
    from spiral_nn.experiment.experiment_main import experiment_main
    try:
        experiment_main(cfg)
    except SpiralNNError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)


def main() -> None:
    # Initial basic logging setup - console only
    # (full logging will be reconfigured in experiment_main() based on config)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler()]  # Only console handler, no file
    )
    run()


if __name__ == "__main__":
    main()
