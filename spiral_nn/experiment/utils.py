"""
Utility functions for experiments.
"""
import importlib
import secrets
from typing import Optional

import numpy as np

from spiral_nn.errors import ConstructionError


def import_class(dotted_path: str) -> type:
    """Import a class from a dotted path string.

    Args:
        dotted_path: Dotted path to the class (e.g., 'spiral_nn.solver.VanillaSGD')

    Returns:
        The imported class

    Raises:
        ImportError: If the module cannot be imported
        AttributeError: If the class cannot be found in the module

    Example:
        >>> cls = import_class('spiral_nn.model.criterion.SoftmaxCrossEntropy')
        >>> cost_fn = cls()
    """
    module_path, class_name = dotted_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


def resolve_seed(seed: Optional[int] = None) -> int:
    """Return `seed`, or a fresh 63-bit seed from the OS entropy source when None."""
    if seed is not None:
        return int(seed)
    try:
        return secrets.randbits(63)
    except OSError as e:
        raise ConstructionError(f"Could not read a seed from the OS entropy source: {e}") from e


def make_rng(seed: int) -> np.random.Generator:
    """Mersenne Twister generator used for every random draw of a run."""
    return np.random.Generator(np.random.MT19937(seed))
