"""
Scalar parameters held by transforms.

A Constant never changes. A Mutable is moved by backpropagation through the
transform that owns it.
"""


class Value:
    """Scalar parameter. Use Constant or Mutable."""

    __slots__ = ('data', 'grad')

    trainable = False

    def __init__(self, data):
        self.data = float(data)
        self.grad = 0.0

    def __repr__(self):
        return f"{type(self).__name__}({self.data:g})"

    def value(self) -> float:
        return self.data

    def adjust(self, delta: float) -> None:
        """Move the stored scalar by delta. Ignored unless trainable."""


class Constant(Value):
    """Frozen parameter: adjust() is a no-op."""

    __slots__ = ()


class Mutable(Value):
    """Adjustable parameter."""

    __slots__ = ()

    trainable = True

    def adjust(self, delta: float) -> None:
        self.data = self.data + delta
