"""
Computation nodes: aggregate child activations, then apply a transform.

Nodes form a tree. Leaves are NodeType.Constant nodes with no inputs.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from nodegrad.core.rules import default_rule
from nodegrad.core.transform import Identity, Transform
from nodegrad.core.value import Value
from nodegrad.protocols import UpdateRule

logger = logging.getLogger(__name__)


# ============================================================================
# AGGREGATION RULES
# ============================================================================

class Aggregation:
    """Combines input activations into the value fed to a node's transform."""

    def aggregate(self, inputs: list[float]) -> float:
        raise NotImplementedError

    def input_gradients(self, upstream: float, inputs: list[float]) -> list[float]:
        """dLoss/dInput for each input, given dLoss/dAggregate."""
        raise NotImplementedError


@dataclass(frozen=True)
class _Constant(Aggregation):
    x: float

    def __repr__(self):
        return f"Constant({self.x:g})"

    def aggregate(self, inputs: list[float]) -> float:
        return self.x

    def input_gradients(self, upstream: float, inputs: list[float]) -> list[float]:
        return [0.0] * len(inputs)


@dataclass(frozen=True)
class _Sum(Aggregation):
    def __repr__(self):
        return "Sum()"

    def aggregate(self, inputs: list[float]) -> float:
        total = 0.0
        for x in inputs:
            total += x
        return total

    def input_gradients(self, upstream: float, inputs: list[float]) -> list[float]:
        return [upstream] * len(inputs)


@dataclass(frozen=True)
class _Product(Aggregation):
    def __repr__(self):
        return "Product()"

    def aggregate(self, inputs: list[float]) -> float:
        total = 1.0
        for x in inputs:
            total *= x
        return total

    def input_gradients(self, upstream: float, inputs: list[float]) -> list[float]:
        # Product of the other inputs, no division since inputs may be zero
        return [
            upstream * math.prod(inputs[:i] + inputs[i + 1:])
            for i in range(len(inputs))
        ]


class NodeType:
    """Aggregation rules: NodeType.Constant(x), NodeType.Sum(), NodeType.Product()."""

    Constant = _Constant
    Sum = _Sum
    Product = _Product


# ============================================================================
# NODE
# ============================================================================

class Node:
    """One computation unit: node_type over input activations, then transform."""

    def __init__(
        self,
        inputs: Optional[list["Node"]],
        node_type: Aggregation,
        transform: Optional[Transform] = None,
    ):
        if transform is None:
            transform = Identity()
        inputs = list(inputs or [])

        # Validate everything before claiming anything, so a rejected node
        # leaves its inputs and transform free for reuse
        if transform._owner is not None:
            raise ValueError(
                f"{transform!r} is already owned by {transform._owner!r}; "
                f"transforms cannot be shared between trees"
            )
        if len({id(node) for node in inputs}) != len(inputs):
            raise ValueError("A node cannot be listed twice as an input; build a second instance")
        for node in inputs:
            if node._owner is not None:
                raise ValueError(
                    f"{node!r} is already an input of {node._owner!r}; "
                    f"nodes cannot be shared between parents"
                )

        transform._claim(self)
        for node in inputs:
            node._owner = self

        self._owner: Optional["Node"] = None
        self.inputs = inputs
        self.node_type = node_type
        self.transform = transform
        self.aggregate: Optional[float] = None
        self.activation: Optional[float] = None
        self._input_activations: list[float] = []

    def __repr__(self):
        return f"Node({self.node_type!r}, {self.transform!r}, inputs={len(self.inputs)})"

    def evaluate(self) -> float:
        """Evaluate inputs depth-first, aggregate, transform. Caches the result."""
        self._input_activations = [node.evaluate() for node in self.inputs]
        self.aggregate = self.node_type.aggregate(self._input_activations)
        self.activation = self.transform.forward(self.aggregate)
        logger.debug(
            "[Node] %r: aggregate=%g activation=%g",
            self.node_type, self.aggregate, self.activation,
        )
        return self.activation

    def backpropagate(self, upstream: float = 1.0, rule: Optional[UpdateRule] = None) -> None:
        """
        Push dLoss/dActivation back through the tree, adjusting Mutable values.

        Requires a prior evaluate().
        """
        if self.activation is None:
            raise RuntimeError(f"{self!r} was never evaluated. Call evaluate() before backpropagate().")
        if rule is None:
            rule = default_rule()

        grad = self.transform.backpropagate(upstream, rule)
        grads = self.node_type.input_gradients(grad, self._input_activations)
        for node, g in zip(self.inputs, grads):
            node.backpropagate(g, rule)

    def parameters(self) -> list[Value]:
        """Every Value in this node's transform and its input subtrees."""
        params = self.transform.parameters()
        for node in self.inputs:
            params.extend(node.parameters())
        return params
