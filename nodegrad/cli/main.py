"""nodegrad CLI: evaluate the demo graph and print its activation."""

import logging

from nodegrad.cli.config import Settings
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
    build,
)

logger = logging.getLogger("nodegrad_cli")


def demo_graph() -> Node:
    """
    Sum of two constant-fed nodes:

        m = -(1.0) + 0.5                      -> -0.5
        n = 1.6 * 1 / (-0.3 + -0.2)           -> -3.2
        o = identity(m + n)                   -> -3.7
    """
    m = Node([], NodeType.Constant(1.0), build([
        Negate(),
        Bias(Constant(0.5)),
    ]))
    n = Node([], NodeType.Constant(-0.3), build([
        Bias(Mutable(-0.2)),
        Invert(),
        Scalar(Mutable(1.6)),
    ]))
    return Node([m, n], NodeType.Sum(), Identity())


def _init_nodegrad(settings: Settings):
    """Install package config from CLI settings."""
    import nodegrad

    config = settings.graph_config()
    nodegrad.init(config)
    logger.info(
        "nodegrad initialized: update_rule=%s, learning_rate=%g",
        config.update_rule, config.learning_rate,
    )


def run():
    """Entry point for `nodegrad` CLI command."""
    settings = Settings()

    # basicConfig logs to stderr; stdout carries only the result
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    _init_nodegrad(settings)

    graph = demo_graph()
    print(graph.evaluate())


if __name__ == "__main__":
    run()
