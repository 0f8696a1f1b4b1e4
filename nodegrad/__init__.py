"""
nodegrad — composable differentiable scalar transforms.

Builds chains of small differentiable functions, evaluates them over a tree
of nodes, and pushes gradients back to adjust mutable parameters.

Usage:
    import nodegrad
    from nodegrad.config import GraphConfig
    from nodegrad.core import Bias, Invert, Mutable, Scalar, build

    nodegrad.init(GraphConfig(update_rule="sgd", learning_rate=0.1))

    t = build([Bias(Mutable(-0.2)), Invert(), Scalar(Mutable(1.6))])
    y = t.forward(-0.3)
    t.backpropagate(1.0)

    # Cross-check an analytic gradient
    from nodegrad.utils import numeric_derivative
    numeric_derivative(t.apply, -0.3)
"""

import logging
import threading

from nodegrad.config import GraphConfig

__version__ = "0.1.0"

_log = logging.getLogger(__name__)

_config: GraphConfig | None = None
_init_lock = threading.Lock()


def init(config: GraphConfig) -> None:
    """
    Install the package-wide configuration.

    Optional: without it, get_config() returns GraphConfig() defaults.

    Args:
        config: Update rule and learning rate used by backpropagate
    """
    global _config

    with _init_lock:
        _config = config

    _log.debug(
        "nodegrad configured: update_rule=%s, learning_rate=%g",
        config.update_rule, config.learning_rate,
    )


def reset() -> None:
    """Drop the installed configuration and go back to defaults."""
    global _config
    with _init_lock:
        _config = None


def get_config() -> GraphConfig:
    """Get the current config, or defaults if init() was never called."""
    if _config is None:
        return GraphConfig()
    return _config
