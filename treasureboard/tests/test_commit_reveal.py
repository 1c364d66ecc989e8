import hashlib
import logging

import pytest

from treasureboard.board.codec import BoardSize, slot_count
from treasureboard.board.parse import IndexFallback
from treasureboard.commit_reveal.commit import build_commitment
from treasureboard.commit_reveal.verify import (
    classify_winners,
    normalize_digest,
    validate_solution,
    verify_reveal,
)
from treasureboard.errors import (
    DuplicateBomb,
    InsufficientBombs,
    InvalidSolutionByte,
    OutOfRangeSlot,
)
from treasureboard.session.state import GameBoard
from treasureboard.utils.hash import get_hasher, sha256

MEDIUM_BOMBS = [1, 3, 5, 7, 9, 11, 13, 15]


def test_medium_board_scenario():
    slots = slot_count("Medium")
    assert slots == 16

    c = build_commitment(MEDIUM_BOMBS, slots, "pw")
    assert list(c.committed_bytes) == [1, 3, 5, 7, 9, 11, 13, 15, ord("p"), ord("w")]
    assert c.digest == hashlib.sha256(bytes([1, 3, 5, 7, 9, 11, 13, 15, 112, 119])).digest()
    assert len(c.digest) == 32
    assert c.bomb_count == 8
    assert c.bombs == MEDIUM_BOMBS
    assert c.salt == b"pw"

    r = verify_reveal(c.committed_bytes, expected=c.digest)
    assert r.valid is True
    assert r.checked is True
    assert r.digest == c.digest


def test_small_board_with_one_bomb_is_insufficient():
    with pytest.raises(InsufficientBombs) as ei:
        build_commitment([0], slot_count("Small"), "pw")
    assert ei.value.got == 1
    assert ei.value.required == 2
    assert ei.value.slot_count == 4


def test_more_than_half_is_allowed():
    c = build_commitment([0, 1, 2], 4, b"salt")
    assert c.bomb_count == 3
    assert c.committed_bytes == b"\x00\x01\x02salt"


def test_commitment_is_deterministic():
    a = build_commitment(MEDIUM_BOMBS, 16, "pw")
    b = build_commitment(list(MEDIUM_BOMBS), 16, b"pw")
    assert a.digest == b.digest
    assert a.committed_bytes == b.committed_bytes


def test_order_of_bombs_is_part_of_the_commitment():
    a = build_commitment(MEDIUM_BOMBS, 16, "pw")
    b = build_commitment(list(reversed(MEDIUM_BOMBS)), 16, "pw")
    assert a.committed_bytes != b.committed_bytes
    assert a.digest != b.digest


def test_salt_changes_the_digest():
    a = build_commitment(MEDIUM_BOMBS, 16, "pw")
    b = build_commitment(MEDIUM_BOMBS, 16, "pw2")
    assert a.digest != b.digest


@pytest.mark.parametrize("size", list(BoardSize))
def test_round_trip_for_every_size(size: BoardSize):
    slots = size.slot_count
    bombs = list(range(slots // 2))
    c = build_commitment(bombs, slots, "correct horse")
    assert verify_reveal(c.committed_bytes, expected=c.hex()).valid
    assert verify_reveal(list(c.committed_bytes), expected=c.digest_list()).valid


def test_out_of_range_bomb_rejected_by_default():
    with pytest.raises(OutOfRangeSlot) as ei:
        build_commitment([0, 4], 4, "pw")
    assert ei.value.index == 4
    assert ei.value.position == 1


def test_out_of_range_bomb_position_fallback_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="treasureboard.commit_reveal.commit"):
        c = build_commitment([3, 200], 4, "pw", policy=IndexFallback.POSITION)
    assert c.bombs == [3, 1]
    assert any("substituting 1" in r.getMessage() for r in caplog.records)


def test_position_fallback_never_substitutes_an_off_board_slot():
    with pytest.raises(OutOfRangeSlot) as ei:
        build_commitment(list(range(16)) + [200], 16, "pw", policy=IndexFallback.POSITION)
    assert ei.value.index == 200
    assert ei.value.position == 16


def test_position_fallback_never_substitutes_a_taken_slot():
    with pytest.raises(OutOfRangeSlot) as ei:
        build_commitment([1, 99, 3], 4, "pw", policy=IndexFallback.POSITION)
    assert ei.value.index == 99
    assert ei.value.position == 1


def test_duplicate_bombs_rejected():
    with pytest.raises(DuplicateBomb) as ei:
        build_commitment([1, 1, 2], 4, "pw")
    assert ei.value.index == 1
    assert tuple(ei.value.positions) == (0, 1)


def test_empty_salt_is_allowed_but_warned(caplog):
    with caplog.at_level(logging.WARNING, logger="treasureboard.commit_reveal.commit"):
        c = build_commitment([0, 1], 4, b"")
    assert c.committed_bytes == b"\x00\x01"
    assert any("empty salt" in r.getMessage() for r in caplog.records)


def test_alternate_hasher():
    h = get_hasher("sha3_256")
    c = build_commitment([0, 1], 4, "pw", hasher=h)
    assert c.hash_alg == "sha3_256"
    assert c.digest == hashlib.sha3_256(b"\x00\x01pw").digest()
    assert not verify_reveal(c.committed_bytes, expected=c.digest).valid
    assert verify_reveal(c.committed_bytes, expected=c.digest, hasher=h).valid


def test_tokens_format_for_reveal_prompt():
    c = build_commitment([0, 3], 4, "pw")
    assert c.tokens() == "0 3 112 119"
    assert c.hex().startswith("0x") and len(c.hex()) == 66


# --- verify -------------------------------------------------------------------


def test_verify_without_expected_returns_digest():
    r = verify_reveal([1, 2, 3])
    assert r.valid is True
    assert r.checked is False
    assert r.digest == sha256(b"\x01\x02\x03")


def test_verify_is_verbatim_no_reorder_no_dedupe():
    a = verify_reveal([3, 1, 1])
    b = verify_reveal([1, 1, 3])
    c = verify_reveal([1, 3])
    assert len({a.digest, b.digest, c.digest}) == 3


def test_verify_mismatch_still_returns_digest(caplog):
    c = build_commitment(MEDIUM_BOMBS, 16, "pw")
    tampered = bytearray(c.committed_bytes)
    tampered[0] = 2
    with caplog.at_level(logging.WARNING, logger="treasureboard.commit_reveal.verify"):
        r = verify_reveal(bytes(tampered), expected=c.digest)
    assert r.valid is False
    assert r.digest == sha256(bytes(tampered))
    assert caplog.records


@pytest.mark.parametrize(
    "solution,position",
    [
        ([1, 2, 256], 2),
        ([-1], 0),
        ([1, "2"], 1),
        ([1.0], 0),
        ([True, 1], 0),
    ],
)
def test_invalid_solution_bytes(solution, position):
    with pytest.raises(InvalidSolutionByte) as ei:
        verify_reveal(solution)
    assert ei.value.position == position


def test_validate_solution_rejects_str():
    with pytest.raises(TypeError):
        validate_solution("1 2 3")  # type: ignore[arg-type]


def test_normalize_digest_shapes():
    d = sha256(b"x")
    assert normalize_digest(d) == d
    assert normalize_digest("0x" + d.hex()) == d
    assert normalize_digest(list(d)) == d


# --- winners ------------------------------------------------------------------


def test_classify_winners_uses_bomb_prefix():
    c = build_commitment([0, 2], 4, "pw")
    board = GameBoard(id=1, size=BoardSize.SMALL, reserved_slots=(1, 2))
    report = classify_winners(board, c.committed_bytes)
    assert report.bombs == (0, 2)
    assert report.winners == (1,)
    assert report.losers == (2,)


def test_classify_winners_salt_bytes_are_not_bombs():
    # salt byte 1 must not count as a bomb
    board = GameBoard(id=1, size=BoardSize.SMALL, reserved_slots=(1, 3))
    report = classify_winners(board, bytes([0, 2, 1]))
    assert report.winners == (1, 3)
    assert report.losers == ()


def test_classify_winners_explicit_bomb_count():
    board = GameBoard(id=1, size=BoardSize.SMALL, reserved_slots=(1, 3))
    report = classify_winners(board, bytes([0, 2, 3, 9]), bomb_count=3)
    assert report.bombs == (0, 2, 3)
    assert report.winners == (1,)
    assert report.losers == (3,)


def test_classify_winners_bomb_count_too_large():
    board = GameBoard(id=1, size=BoardSize.SMALL)
    with pytest.raises(ValueError):
        classify_winners(board, bytes([0]), bomb_count=2)
