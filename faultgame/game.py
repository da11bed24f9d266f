"""
Claims of a fault dispute game, and the relations between them that the move-submission logic depends on.

A Claim is created once, when a party makes a move (the root claim, an attack or a defense), and is never modified
afterwards. The GameState is an append-only list of claims, bounded by the max depth of the game.

Appending to a GameState is not synchronized: a single writer must own the admission of new claims.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .position import Position
from .utils import check_hash, format_hash


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaimData:
    value: bytes
    position: Position

    def __post_init__(self):
        check_hash(self.value)

    def __str__(self) -> str:
        return f"ClaimData(value: {format_hash(self.value)}, position: {self.position})"


@dataclass(frozen=True)
class Claim:
    """
    A claim made in the game.

    Attributes:
        claim_data: the claimed value and its position in the game tree.
        contract_index: the index of the claim in the game.
        parent_contract_index: the index of the claim this one responds to; None for the root claim.
    """
    claim_data: ClaimData
    contract_index: int = 0
    parent_contract_index: Optional[int] = None

    @property
    def value(self) -> bytes:
        return self.claim_data.value

    @property
    def position(self) -> Position:
        return self.claim_data.position

    @property
    def depth(self) -> int:
        return self.claim_data.position.depth

    def is_root(self) -> bool:
        return self.claim_data.position.is_root_position()


def is_duplicate(claim: Claim, existing_claims: Iterable[Claim]) -> bool:
    """Returns True if a claim with the same position and value is already in `existing_claims`."""

    return any(c.claim_data == claim.claim_data for c in existing_claims)


def defends_parent(claim: Claim, parent: Optional[Claim]) -> bool:
    """
    Returns True if `claim` is a grandchild of `parent` reached through the right child of `parent`.

    Relative to the subtree of `parent`, such a claim is at depth 2 with index 2 or 3, that is, the top bit of its
    relative index is set. A claim without a parent never defends.
    """
    if parent is None:
        return False
    if claim.depth != parent.depth + 2:
        return False

    relative = claim.position.relative_to_ancestor_at_depth(parent.depth)
    return relative.index_at_depth >> 1 == 1


class GameState:
    """
    Append-only collection of the claims of a game, with the max depth of its tree.

    Claims deeper than the max depth, whose contract index is not their position in the game, or duplicating the
    position and value of a known claim, are rejected.
    """

    def __init__(self, claims: Iterable[Claim] = (), max_depth: int = 0):
        if max_depth < 0:
            raise ValueError("max_depth must be non-negative")

        self.max_depth = max_depth
        self._claims: List[Claim] = []
        self.put_all(claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __iter__(self) -> Iterator[Claim]:
        return iter(list(self._claims))

    def claims(self) -> List[Claim]:
        """Return the claims in the order they were added."""
        return list(self._claims)

    def put(self, claim: Claim) -> None:
        """Appends `claim`, whose contract index must be its position in the game."""
        if claim.depth > self.max_depth:
            raise ValueError(f"Claim at depth {claim.depth} exceeds the max depth {self.max_depth} of the game")
        if claim.contract_index != len(self._claims):
            raise ValueError(f"Claim has contract index {claim.contract_index}, expected {len(self._claims)}")
        if self.is_duplicate(claim):
            raise ValueError(f"Duplicate claim: {claim.claim_data}")

        logger.debug("Adding claim %d at %s (parent: %s)",
                     claim.contract_index, claim.position, claim.parent_contract_index)
        self._claims.append(claim)

    def put_all(self, claims: Iterable[Claim]) -> None:
        for claim in claims:
            self.put(claim)

    def is_duplicate(self, claim: Claim) -> bool:
        return is_duplicate(claim, self._claims)

    def get_parent(self, claim: Claim) -> Optional[Claim]:
        if claim.is_root() or claim.parent_contract_index is None:
            return None

        if not 0 <= claim.parent_contract_index < len(self._claims):
            raise ValueError(f"Unknown parent claim index {claim.parent_contract_index}")
        return self._claims[claim.parent_contract_index]

    def defends_parent(self, claim: Claim) -> bool:
        return defends_parent(claim, self.get_parent(claim))
