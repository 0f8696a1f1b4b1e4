"""Parameter update rules used by Transform.backpropagate."""

import logging

from nodegrad.config import GraphConfig
from nodegrad.protocols import UpdateRule

logger = logging.getLogger(__name__)


class Accumulate:
    """Add the raw gradient to the parameter."""

    def delta(self, gradient: float) -> float:
        return gradient

    def __repr__(self):
        return "Accumulate()"


class GradientDescent:
    """Step against the gradient: delta = -learning_rate * gradient."""

    def __init__(self, learning_rate: float = 0.01):
        if learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {learning_rate}")
        self.learning_rate = float(learning_rate)

    def delta(self, gradient: float) -> float:
        return -self.learning_rate * gradient

    def __repr__(self):
        return f"GradientDescent(learning_rate={self.learning_rate:g})"


def rule_from_config(config: GraphConfig) -> UpdateRule:
    """Build the update rule named by config.update_rule."""
    if config.update_rule == "accumulate":
        return Accumulate()
    if config.update_rule == "sgd":
        return GradientDescent(config.learning_rate)
    raise ValueError(f"Unknown update rule {config.update_rule!r}")


def default_rule() -> UpdateRule:
    """Rule for the package-wide config (see nodegrad.init)."""
    import nodegrad
    rule = rule_from_config(nodegrad.get_config())
    logger.debug("[Rules] Using %r", rule)
    return rule
