r"""
Addressing for the nodes of the binary bisection tree of a fault dispute game.

Nodes are numbered with generalized indices, the same way the on-chain verifier does:

             1
           /   \
          2     3
         / \   / \
        4   5 6   7

A node at depth d with index i among the 2^d nodes at that depth has generalized index (1 << d) | i.
The root has depth 0. Indexes are arbitrary precision integers, so trees deeper than 64 levels
are supported; depths are capped at MAX_DEPTH. Generalized indices and trace indices are only computed
up to MAX_INDEX_BITS bits; wider results raise PositionOverflow.
"""

import operator
from dataclasses import dataclass

from .errors import DepthTooSmall, InvalidNavigation, PositionOverflow


# depths are 64-bit unsigned integers in the on-chain encoding
MAX_DEPTH = 2**64 - 1

# widest generalized index or trace index that is computed, in bits
MAX_INDEX_BITS = 2**24


class Depth(int):
    """The distance of a node from the root of the tree. Values outside [0, MAX_DEPTH] are rejected."""

    def __new__(cls, value: int = 0):
        value = operator.index(value)
        if not 0 <= value <= MAX_DEPTH:
            raise PositionOverflow(f"depth {value} is out of range [0, {MAX_DEPTH}]")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Depth({int(self)})"

    def is_root(self) -> bool:
        return self == 0

    def is_odd(self) -> bool:
        return self % 2 == 1

    def max_gindex(self) -> int:
        """Return 2^depth: the number of nodes at this depth, and the generalized index of the leftmost one."""
        return pow2(self)


def pow2(exponent: int) -> int:
    if exponent > MAX_INDEX_BITS:
        raise PositionOverflow(f"2^{exponent} is wider than {MAX_INDEX_BITS} bits")
    return 1 << exponent


def most_significant_bit_index(x: int) -> int:
    """Return floor(log_2(x)) for a positive integer `x`, and 0 for x == 0."""

    if x < 0:
        raise PositionOverflow(f"generalized index must be non-negative, got {x}")
    if x == 0:
        return 0
    return x.bit_length() - 1


@dataclass(frozen=True)
class Position:
    """
    An immutable node of the game tree, identified by its depth and by its index among the nodes at that depth.

    Every navigation method returns a new Position. The index is validated at construction time: it must satisfy
    0 <= index_at_depth < 2^depth, otherwise PositionOverflow is raised.
    """

    depth: Depth
    index_at_depth: int = 0

    def __post_init__(self):
        depth = Depth(self.depth)
        index_at_depth = operator.index(self.index_at_depth)
        if index_at_depth < 0 or index_at_depth >> depth != 0:
            raise PositionOverflow(f"for depth {depth}, index {index_at_depth} is out of range [0, 2^{depth})")

        object.__setattr__(self, 'depth', depth)
        object.__setattr__(self, 'index_at_depth', index_at_depth)

    @classmethod
    def from_gindex(cls, x: int) -> 'Position':
        """
        Create the Position with generalized index `x`.

        By convention, x == 0 (which is not the index of any node) maps to the root position.
        """
        depth = most_significant_bit_index(x)
        return cls(depth, x & ~(1 << depth))

    def to_gindex(self) -> int:
        return pow2(self.depth) | self.index_at_depth

    def is_root_position(self) -> bool:
        return self.depth == 0 and self.index_at_depth == 0

    def left_child(self) -> 'Position':
        return Position(self._child_depth(), (self.index_at_depth << 1) | 0)

    def right_child(self) -> 'Position':
        return Position(self._child_depth(), (self.index_at_depth << 1) | 1)

    def _child_depth(self) -> int:
        if self.depth == MAX_DEPTH:
            raise InvalidNavigation(f"{self} is already at the maximum depth")
        return self.depth + 1

    def parent(self) -> 'Position':
        if self.depth == 0:
            raise InvalidNavigation("the root position has no parent")
        return Position(self.depth - 1, self.index_at_depth >> 1)

    def attack(self) -> 'Position':
        """Return the position of a claim attacking this one, that is, its left child."""
        return self.left_child()

    def defend(self) -> 'Position':
        """Return the position of a claim defending this one: the left child of the right child of its parent."""
        return self.parent().right_child().left_child()

    def relative_to_ancestor_at_depth(self, ancestor_depth: int) -> 'Position':
        """
        Return the coordinate of this position inside the subtree whose root is at depth `ancestor_depth`.

        The path bits above `ancestor_depth` are discarded, so the result only depends on the lowest
        (depth - ancestor_depth) bits of the index. Raises DepthTooSmall if the ancestor is deeper than this position.
        """
        ancestor_depth = Depth(ancestor_depth)
        if ancestor_depth > self.depth:
            raise DepthTooSmall(self.depth, ancestor_depth)

        new_depth = self.depth - ancestor_depth
        if new_depth >= self.index_at_depth.bit_length():
            return Position(new_depth, self.index_at_depth)
        return Position(new_depth, self.index_at_depth & ((1 << new_depth) - 1))

    def trace_index(self, max_depth: int) -> int:
        """
        Return the index in the trace of the claim at this position, in a game with the given `max_depth`.

        It is the index of the leaf reached by going right until `max_depth` is reached.
        """
        rd = max_depth - self.depth
        if rd < 0:
            raise InvalidNavigation(f"{self} is deeper than the max depth {max_depth}")

        # the trace index has at most max_depth bits
        if max_depth > MAX_INDEX_BITS:
            raise PositionOverflow(f"trace index for max depth {max_depth} is wider than {MAX_INDEX_BITS} bits")

        # going right shifts the index left and sets the low bit; all the steps are done at once
        return (self.index_at_depth << rd) | ((1 << rd) - 1)

    def right_of(self, parent: 'Position') -> bool:
        return self.index_at_depth >> 1 != parent.index_at_depth

    def move_right(self) -> 'Position':
        """Return the next slot at the same depth. Fails with PositionOverflow past the last node of the depth."""
        return Position(self.depth, self.index_at_depth + 1)

    def describe(self, max_depth: int) -> str:
        return (f"GIN: {self.to_gindex():4b}\tTrace Position is {self.index_at_depth:4b}\t"
                f"Trace Depth is: {self.depth}\tTrace Index is: {self.trace_index(max_depth)}")

    def __str__(self) -> str:
        return f"Position(depth: {self.depth}, index_at_depth: {self.index_at_depth})"
