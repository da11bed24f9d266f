from .errors import DepthTooSmall, InvalidNavigation, PositionError, PositionOverflow
from .game import Claim, ClaimData, GameState, defends_parent, is_duplicate
from .position import MAX_DEPTH, Depth, Position, most_significant_bit_index
