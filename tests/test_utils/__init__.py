from typing import Optional

from faultgame.game import Claim, ClaimData
from faultgame.position import Position
from faultgame.utils import hash_from_hex


TEST_MAX_DEPTH = 3


def make_claim(gindex: int, value: str = "0x00", contract_index: int = 0,
               parent_contract_index: Optional[int] = None) -> Claim:
    return Claim(
        ClaimData(hash_from_hex(value), Position.from_gindex(gindex)),
        contract_index=contract_index,
        parent_contract_index=parent_contract_index,
    )
