import logging
import os

from omegaconf import DictConfig


def setup_logging(cfg: DictConfig) -> None:
    """Setup logging configuration based on the config.

    Replaces the root handlers with a console handler and a file handler
    writing to `<paths.log_dir>/experiment.log` (or `log_file`).
    """
    # Configure Python logging based on config, with INFO as default
    log_level_str = cfg.get("log_level", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    # Clear existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format))

    # File handler - use paths from config if available, otherwise fallback
    if "paths" in cfg and "log_dir" in cfg.paths:
        log_file = f"{cfg.paths.log_dir}/experiment.log"
    else:
        log_file = cfg.get("log_file", "./logs/experiment.log")

    os.makedirs(os.path.dirname(log_file), exist_ok=True)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(log_format))

    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Lightning prints its own banner and tips at INFO; keep them out of the run log
    logging.getLogger("pytorch_lightning").setLevel(max(log_level, logging.WARNING))
    logging.getLogger("lightning.pytorch").setLevel(max(log_level, logging.WARNING))
    logging.getLogger("werkzeug").setLevel(max(log_level, logging.WARNING))

    logger = logging.getLogger('spiral_nn.experiment.setup_logging')
    logger.info(f'Log level set to: {log_level_str}')
    logger.info(f'Logging to console and file: {log_file}')
