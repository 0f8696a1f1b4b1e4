"""
nodegrad quickstart: build transforms, evaluate a node tree, train parameters.

No setup needed beyond installing the package.

    python examples/quickstart.py
"""

import nodegrad
from nodegrad.config import GraphConfig
from nodegrad.core import (
    Bias,
    Constant,
    Identity,
    Invert,
    Mutable,
    Negate,
    Node,
    NodeType,
    Scalar,
    Sigmoid,
    Tanh,
    build,
)
from nodegrad.utils import numeric_derivative


# -- Step 1: Transforms are plain functions ---------------------------------

t = build([Bias(Constant(1.0)), Tanh(), Sigmoid()])
print(f"{t!r}")
print(f"  apply(0.5) = {t.apply(0.5):.6f}")
print(f"  leaves     = {t.flatten()}")

t.forward(0.5)
print(f"  gradient   = {t.backpropagate(1.0):.6f}")
print(f"  numeric    = {numeric_derivative(t.apply, 0.5):.6f}\n")


# -- Step 2: Evaluate a node tree --------------------------------------------

m = Node([], NodeType.Constant(1.0), build([Negate(), Bias(Constant(0.5))]))
n = Node([], NodeType.Constant(-0.3), build([
    Bias(Mutable(-0.2)),
    Invert(),
    Scalar(Mutable(1.6)),
]))
o = Node([m, n], NodeType.Sum(), Identity())

print(f"Activation: {o.evaluate()}")
print(f"Parameters: {o.parameters()}\n")


# -- Step 3: Fit the mutable parameters to a target --------------------------
# Squared error L = (y - target)^2, so dL/dy = 2 * (y - target).

nodegrad.init(GraphConfig(update_rule="sgd", learning_rate=0.01))

target = -2.0
for step in range(30):
    y = o.evaluate()
    loss = (y - target) ** 2
    if step % 5 == 0:
        print(f"  step {step:2d}  y={y:+.4f}  loss={loss:.6f}")
    o.backpropagate(2.0 * (y - target))

print(f"\nFinal activation: {o.evaluate():+.4f} (target {target:+.1f})")
print(f"Parameters: {o.parameters()}")
