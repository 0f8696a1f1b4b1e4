"""
nodegrad configuration.

Tuning parameters for gradient propagation are set here.
No hardcoded update policy in the rest of the package.
"""

from dataclasses import dataclass

UPDATE_RULES = ("accumulate", "sgd")


@dataclass
class GraphConfig:
    """Configuration for transform backpropagation."""

    # Update rule applied to Mutable values during backpropagate:
    #   "accumulate" -> value += gradient
    #   "sgd"        -> value -= learning_rate * gradient
    update_rule: str = "accumulate"

    # Only read by the "sgd" rule
    learning_rate: float = 0.01

    def __post_init__(self):
        if self.update_rule not in UPDATE_RULES:
            raise ValueError(
                f"Unknown update rule {self.update_rule!r}. "
                f"Available: {', '.join(UPDATE_RULES)}"
            )
        if self.learning_rate <= 0:
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate}")
