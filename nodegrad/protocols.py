"""
Update rule protocol for dependency injection.

Callers can pass any object with a delta() method to backpropagate().
nodegrad ships Accumulate and GradientDescent in nodegrad.core.rules.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class UpdateRule(Protocol):
    """Turns a parameter gradient into the adjustment applied to a Value."""

    def delta(self, gradient: float) -> float:
        """
        Compute the adjustment for one parameter.

        Args:
            gradient: dLoss/dParameter from the current backward pass

        Returns:
            The amount passed to Value.adjust().
        """
        ...
