import pytest

from faultgame.cli import Session
from faultgame.config import Config
from faultgame.game import Claim, ClaimData
from faultgame.position import Position
from faultgame.utils import hash_from_hex


@pytest.fixture
def test_claims():
    # root & middle are from the trace "abcdexyz"
    # top & bottom are from the trace "abcdefgh"
    root = Claim(ClaimData(hash_from_hex("0x077a"), Position(0, 0)))
    top = Claim(ClaimData(hash_from_hex("0x0364"), Position(1, 0)), contract_index=1, parent_contract_index=0)
    middle = Claim(ClaimData(hash_from_hex("0x0578"), Position(2, 2)), contract_index=2, parent_contract_index=1)
    bottom = Claim(ClaimData(hash_from_hex("0x0465"), Position(3, 4)), contract_index=3, parent_contract_index=2)

    return root, top, middle, bottom


@pytest.fixture
def session(tmp_path):
    config = Config(
        max_depth=4,
        log_file=str(tmp_path / "faultgame-cli.log"),
        history_file=str(tmp_path / ".cli-history"),
    )
    return Session(config)
