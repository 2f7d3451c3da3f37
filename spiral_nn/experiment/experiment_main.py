from omegaconf import DictConfig, OmegaConf
import logging
import pytorch_lightning as pl

from spiral_nn.diagnostics.server import start_diagnostics
from spiral_nn.experiment.setup_logging import setup_logging
from spiral_nn.experiment.run_training import run_training
from spiral_nn.experiment.run_testing import check_accuracy
from spiral_nn.experiment.utils import make_rng, resolve_seed
from spiral_nn._pytorch_lightning.lit_model import LitModel


def _accuracy_phase(cfg: DictConfig, model, rng, label: str):
    logger = logging.getLogger("spiral_nn.experiment")
    logger.info(f"=== ACCURACY CHECK ({label}) ===")
    return check_accuracy(
        model,
        dimension_num=cfg.data.dimension_num,
        class_num=cfg.data.class_num,
        test_count=cfg.evaluation.test_count,
        rng=rng,
        noise=cfg.data.get("noise", 0.2),
    )


def experiment_main(cfg: DictConfig) -> dict:
    """Experiment main, receives config from main.py"""
    logger = logging.getLogger("spiral_nn.experiment")
    logger.info("Entered experiment_main")
    setup_logging(cfg)

    logger.info('Running experiment with config:')
    logger.info('============================================================')
    try:
        resolved_config = OmegaConf.to_yaml(cfg, resolve=True)
        logger.info(resolved_config)
    except Exception as e:
        # Print unresolved config first, then reraise the exception
        logger.info(OmegaConf.to_yaml(cfg, resolve=False))
        logger.warning(f"Could not fully resolve config for logging: {e}")
        raise
    logger.info('============================================================')

    # One seed, one generator, threaded through every random draw
    seed = resolve_seed(cfg.get("seed"))
    logger.info(f"Seed: {seed}")
    pl.seed_everything(seed % 2**32)
    rng = make_rng(seed)

    logger.info("Creating Lightning model...")
    model = LitModel(cfg, rng)

    phases = cfg.get("phases", {"training": True, "testing": True})
    results = {"seed": seed}

    logger.info("Experiment phases configuration:")
    logger.info(f"  Training: {'+' if phases['training'] else '-'}")
    logger.info(f"  Testing: { '+' if phases['testing']  else '-'}")

    if phases.get("testing", False):
        results["accuracy_before"] = _accuracy_phase(cfg, model, rng, "before training")

    diagnostics = cfg.get("diagnostics", {})
    if diagnostics.get("enabled", False):
        start_diagnostics(diagnostics.get("host", "localhost"), diagnostics.get("port", 6060))

    if phases.get("training", False):
        logger.info("=== TRAINING PHASE ===")
        results["training"] = run_training(cfg, model, rng)
        logger.info("Training phase completed!")
    else:
        logger.info("Training phase skipped")

    if phases.get("testing", False):
        results["accuracy_after"] = _accuracy_phase(cfg, model, rng, "after training")

    logger.info("All experiment phases completed!")
    return results
