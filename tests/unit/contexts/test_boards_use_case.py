from __future__ import annotations

import pytest

from taskify.contexts.boards.application import BoardsUseCase
from taskify.contexts.boards.repository import BoardRepository
from taskify.kernel.errors import NotFoundError, ValidationFailedError

pytestmark = pytest.mark.asyncio


@pytest.fixture
def boards(sessions) -> BoardsUseCase:
    return BoardsUseCase(BoardRepository(sessions))


async def test_deposit_then_withdraw_get_positions_one_and_two(boards):
    deposit = await boards.create(2, "Deposit")
    withdraw = await boards.create(2, "Withdraw", "cash out")

    assert (deposit.position, withdraw.position) == (1, 2)

    fetched = await boards.get(2, withdraw.id)
    assert fetched.name == "Withdraw"
    assert fetched.position == 2
    assert fetched.description == "cash out"


async def test_board_is_only_reachable_through_its_owner(boards):
    board = await boards.create(1, "Mine")

    with pytest.raises(NotFoundError):
        await boards.get(2, board.id)
    with pytest.raises(NotFoundError):
        await boards.update(2, board.id, "Stolen")
    with pytest.raises(NotFoundError):
        await boards.delete(2, board.id)

    assert (await boards.get(1, board.id)).name == "Mine"


async def test_update_with_empty_name_leaves_row_unchanged(boards):
    board = await boards.create(5, "Original", "keep me")

    with pytest.raises(ValidationFailedError) as excinfo:
        await boards.update(5, board.id, "   ")

    assert excinfo.value.field == "name"
    assert await boards.get(5, board.id) == board


async def test_update_keeps_position(boards):
    await boards.create(5, "First")
    second = await boards.create(5, "Second")

    updated = await boards.update(5, second.id, "Renamed", "new")

    assert updated.position == 2
    assert updated.name == "Renamed"
    assert updated.description == "new"


async def test_create_validates_before_storage(boards):
    with pytest.raises(ValidationFailedError):
        await boards.create(0, "Board")
    with pytest.raises(ValidationFailedError):
        await boards.create(1, "x" * 101)
    with pytest.raises(ValidationFailedError):
        await boards.create(1, "ok", "d" * 2001)

    # nothing was persisted, so the next board still gets position 1
    assert (await boards.create(1, "ok")).position == 1


async def test_delete_does_not_renumber_siblings(boards):
    first = await boards.create(9, "first")
    second = await boards.create(9, "second")
    third = await boards.create(9, "third")

    await boards.delete(9, second.id)

    with pytest.raises(NotFoundError):
        await boards.get(9, second.id)
    assert (await boards.get(9, first.id)).position == 1
    assert (await boards.get(9, third.id)).position == 3
