from nodegrad.core.value import (
    Value,
    Constant,
    Mutable,
)
from nodegrad.core.transform import (
    Transform,
    Identity,
    Bias,
    Negate,
    Scalar,
    Invert,
    Sigmoid,
    Tanh,
    ReLU,
    Composition,
    build,
)
from nodegrad.core.rules import (
    Accumulate,
    GradientDescent,
    rule_from_config,
)
from nodegrad.core.node import (
    Aggregation,
    Node,
    NodeType,
)
