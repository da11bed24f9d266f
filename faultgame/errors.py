class PositionError(ValueError):
    """Base class for the errors raised by the tree addressing arithmetic."""


class DepthTooSmall(PositionError):
    """The requested ancestor depth is deeper than the position itself."""

    def __init__(self, depth: int, ancestor_depth: int):
        super().__init__(f"position depth is too small: depth {depth}, ancestor depth {ancestor_depth}")
        self.depth = depth
        self.ancestor_depth = ancestor_depth


class InvalidNavigation(PositionError):
    """Navigating above the root, below the maximum depth, or past the game's max depth."""


class PositionOverflow(PositionError):
    """A depth or index that cannot be represented in the position encoding."""
