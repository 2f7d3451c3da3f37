from pathlib import Path

import pytest
from omegaconf import OmegaConf

from spiral_nn.experiment.utils import make_rng


CONF_PATH = Path(__file__).resolve().parents[1] / "spiral_nn" / "conf" / "main.yaml"


def pytest_addoption(parser):
    parser.addoption("--runslow", action="store_true", default=False, help="run full-length training tests")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def rng():
    return make_rng(1234)


@pytest.fixture
def cfg(tmp_path):
    """Default config with a short run, no diagnostics and logs under tmp_path."""
    cfg = OmegaConf.load(CONF_PATH)
    cfg.seed = 1234
    cfg.paths.log_dir = str(tmp_path / "logs")
    cfg.diagnostics.enabled = False
    cfg.train.max_epochs = 50
    cfg.train.report_every = 10
    return cfg
