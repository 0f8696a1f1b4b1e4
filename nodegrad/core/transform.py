"""
Composable differentiable scalar transforms.

Each transform is a function f: float -> float with a forward pass and a
backward pass. Leaf transforms are chained with build(), which folds a
sequence into left-nested Compositions applied in declared order:

    build([a, b, c]) == Composition(Composition(a, b), c)   # c(b(a(x)))

forward() caches the input seen by every transform in the tree so that
backpropagate() can evaluate derivatives at the right point. apply() is the
pure variant and leaves the cache alone.
"""

import logging
import math
from typing import Iterable, Optional

from nodegrad.core.rules import default_rule
from nodegrad.core.value import Value
from nodegrad.protocols import UpdateRule

logger = logging.getLogger(__name__)


def _reciprocal(x: float) -> float:
    """1/x with IEEE signed infinity at zero instead of ZeroDivisionError."""
    if x == 0.0:
        return math.copysign(math.inf, x)
    return 1.0 / x


def _sigmoid(x: float) -> float:
    # Numerically stable sigmoid
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    e = math.exp(x)
    return e / (1.0 + e)


class Transform:
    """Base class for all transforms."""

    def __init__(self):
        self._input: Optional[float] = None
        self._owner: object = None

    def __repr__(self):
        return f"{type(self).__name__}()"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def build(cls, transforms: Iterable["Transform"]) -> "Transform":
        return build(transforms)

    def _claim(self, owner: object) -> None:
        """Mark this transform as owned. A transform has at most one owner."""
        if self._owner is not None:
            raise ValueError(
                f"{self!r} is already owned by {self._owner!r}; "
                f"transforms cannot be shared between trees"
            )
        self._owner = owner

    def flatten(self) -> list["Transform"]:
        """Leaf transforms in application order."""
        return [self]

    def parameters(self) -> list[Value]:
        """Values embedded in this transform."""
        return []

    # ------------------------------------------------------------------
    # Forward
    # ------------------------------------------------------------------

    def apply(self, x: float) -> float:
        """Evaluate f(x) without touching the forward cache."""
        raise NotImplementedError

    def forward(self, x: float) -> float:
        """Evaluate f(x) and remember x for the backward pass."""
        self._input = x
        return self.apply(x)

    # ------------------------------------------------------------------
    # Backward
    # ------------------------------------------------------------------

    def backpropagate(self, upstream: float, rule: Optional[UpdateRule] = None) -> float:
        """
        Push a gradient back through the transform.

        Args:
            upstream: dLoss/dOutput
            rule: How parameter gradients become adjustments. Defaults to the
                rule configured with nodegrad.init().

        Returns:
            dLoss/dInput, evaluated at the input cached by the last forward().
        """
        if rule is None:
            rule = default_rule()
        return self._backward(upstream, rule)

    def _cached_input(self) -> float:
        if self._input is None:
            raise RuntimeError(
                f"{self!r} has no cached input. Call forward() before backpropagate()."
            )
        return self._input

    def derivative(self, x: float) -> float:
        """df/dx at x."""
        raise NotImplementedError

    def _backward(self, upstream: float, rule: UpdateRule) -> float:
        return upstream * self.derivative(self._cached_input())


# ============================================================================
# LEAF TRANSFORMS
# ============================================================================

class Identity(Transform):
    def apply(self, x: float) -> float:
        return x

    def derivative(self, x: float) -> float:
        return 1.0


class Negate(Transform):
    def apply(self, x: float) -> float:
        return -x

    def derivative(self, x: float) -> float:
        return -1.0


class Invert(Transform):
    """1/x. Zero maps to a signed infinity."""

    def apply(self, x: float) -> float:
        return _reciprocal(x)

    def derivative(self, x: float) -> float:
        return -_reciprocal(x * x)


class Sigmoid(Transform):
    def apply(self, x: float) -> float:
        return _sigmoid(x)

    def derivative(self, x: float) -> float:
        s = _sigmoid(x)
        return s * (1.0 - s)


class Tanh(Transform):
    def apply(self, x: float) -> float:
        return math.tanh(x)

    def derivative(self, x: float) -> float:
        t = math.tanh(x)
        return 1.0 - t * t


class ReLU(Transform):
    """max(0, x). NaN maps to 0.0."""

    def apply(self, x: float) -> float:
        return x if x > 0.0 else 0.0

    def derivative(self, x: float) -> float:
        return 1.0 if x > 0.0 else 0.0


class _Parametric(Transform):
    """Leaf transform holding one Value."""

    def __init__(self, param: Value):
        if not isinstance(param, Value):
            raise TypeError(
                f"{type(self).__name__} expects a Constant or Mutable, got {type(param).__name__}"
            )
        super().__init__()
        self.param = param

    def __repr__(self):
        return f"{type(self).__name__}({self.param!r})"

    def parameters(self) -> list[Value]:
        return [self.param]

    def param_derivative(self, x: float) -> float:
        """df/dparam at x."""
        raise NotImplementedError

    def _backward(self, upstream: float, rule: UpdateRule) -> float:
        x = self._cached_input()
        # Input gradient uses the parameter as it was during forward
        grad_input = upstream * self.derivative(x)

        grad = upstream * self.param_derivative(x)
        self.param.grad = grad
        if self.param.trainable:
            before = self.param.value()
            self.param.adjust(rule.delta(grad))
            logger.debug(
                "[Transform] %s param %g -> %g (grad=%g)",
                type(self).__name__, before, self.param.value(), grad,
            )
        return grad_input


class Bias(_Parametric):
    """x + b."""

    def apply(self, x: float) -> float:
        return self.param.value() + x

    def derivative(self, x: float) -> float:
        return 1.0

    def param_derivative(self, x: float) -> float:
        return 1.0


class Scalar(_Parametric):
    """k * x."""

    def apply(self, x: float) -> float:
        return self.param.value() * x

    def derivative(self, x: float) -> float:
        return self.param.value()

    def param_derivative(self, x: float) -> float:
        return x


# ============================================================================
# COMPOSITION
# ============================================================================

class Composition(Transform):
    """second(first(x)). Owns both sub-transforms."""

    def __init__(self, first: Transform, second: Transform):
        if first is second:
            raise ValueError(f"Cannot compose {first!r} with itself; build a second instance")
        super().__init__()
        first._claim(self)
        try:
            second._claim(self)
        except ValueError:
            first._owner = None
            raise
        self.first = first
        self.second = second

    def __repr__(self):
        return f"Composition({self.first!r}, {self.second!r})"

    def flatten(self) -> list[Transform]:
        return self.first.flatten() + self.second.flatten()

    def parameters(self) -> list[Value]:
        return self.first.parameters() + self.second.parameters()

    def apply(self, x: float) -> float:
        return self.second.apply(self.first.apply(x))

    def forward(self, x: float) -> float:
        self._input = x
        return self.second.forward(self.first.forward(x))

    def _backward(self, upstream: float, rule: UpdateRule) -> float:
        # Mirror of forward: second first, then first
        self._cached_input()
        return self.first._backward(self.second._backward(upstream, rule), rule)


# ============================================================================
# BUILDER
# ============================================================================

def build(transforms: Iterable[Transform]) -> Transform:
    """
    Fold a non-empty sequence of transforms into one.

    A single transform is returned unchanged. Longer sequences become a
    left-nested Composition tree applied left to right.

    Raises:
        ValueError: the sequence is empty, repeats a transform instance, or
            holds a transform already owned elsewhere. Nothing is claimed.
        TypeError: an element is not a Transform
    """
    items = list(transforms)
    if not items:
        raise ValueError("build() needs at least one transform")
    for t in items:
        if not isinstance(t, Transform):
            raise TypeError(f"build() expects Transform instances, got {type(t).__name__}")

    # Reject before composing: a partial tree would keep its claims
    if len(items) > 1:
        if len({id(t) for t in items}) != len(items):
            raise ValueError("build() got the same transform instance twice; build a second instance")
        for t in items:
            if t._owner is not None:
                raise ValueError(
                    f"{t!r} is already owned by {t._owner!r}; "
                    f"transforms cannot be shared between trees"
                )

    result = items[0]
    for t in items[1:]:
        result = Composition(result, t)

    logger.debug("[Transform] Built %r", result)
    return result
