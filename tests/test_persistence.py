from __future__ import annotations

import json
import logging

import numpy as np
import pytest

from block_blast.game import BlockBlastGame, GameConfig, GameStore, state_from_record, state_to_record
from tests.helpers import make_game, set_tray


def played_game() -> BlockBlastGame:
    game = make_game(5)
    set_tray(game, ["line5_h", "single", "square2"])
    game.place(0, 0, 0)
    game.place(2, 4, 4)
    return game


def test_record_layout_is_json_friendly() -> None:
    record = state_to_record(played_game().state)
    assert set(record) == {"board", "bag", "tray", "used", "score", "best", "history"}
    assert record["used"] == [True, False, True]
    assert record["score"] == 9
    assert [entry["slot"] for entry in record["history"]] == [0, 2]
    json.dumps(record)


def test_store_round_trip(tmp_path) -> None:
    game = played_game()
    store = GameStore(tmp_path / "save.json")
    store.save(game.state)

    loaded = store.load()
    assert loaded is not None
    assert np.array_equal(loaded.board.grid, game.state.board.grid)
    assert loaded.bag == game.state.bag
    assert loaded.tray == game.state.tray
    assert loaded.used == game.state.used
    assert (loaded.score, loaded.best) == (game.state.score, game.state.best)

    resumed = BlockBlastGame(GameConfig(), state=loaded)
    assert resumed.undo() is True
    assert resumed.state.score == 5
    assert resumed.state.used == [True, False, False]
    assert resumed.undo() is True
    assert resumed.state.board.filled_count() == 0


def test_missing_file_loads_nothing(tmp_path) -> None:
    assert GameStore(tmp_path / "absent.json").load() is None


def test_unparsable_file_loads_nothing(tmp_path, caplog) -> None:
    path = tmp_path / "save.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="block_blast.game.persistence"):
        assert GameStore(path).load() is None
    assert "could not read saved game" in caplog.text


def test_corrupt_fields_fall_back_individually(caplog) -> None:
    record = state_to_record(played_game().state)
    record["board"] = [[0, 1], [1]]
    record["bag"] = ["x", 3]
    record["score"] = 12
    record["best"] = "lots"
    with caplog.at_level(logging.WARNING, logger="block_blast.game.persistence"):
        state = state_from_record(record)
    assert state.board.filled_count() == 0
    assert state.bag == []
    assert state.tray == record["tray"]
    assert state.score == 12
    assert state.best == 12
    assert len(state.history) == 2
    assert "board" in caplog.text and "bag" in caplog.text


def test_best_is_at_least_score_and_zero() -> None:
    assert state_from_record({"score": 30, "best": 10}).best == 30
    assert state_from_record({"score": -4, "best": -1}).best == 0
    assert state_from_record({}).score == 0


def test_corrupt_tray_is_redealt_on_resume() -> None:
    record = state_to_record(played_game().state)
    record["tray"] = [1, 2]
    state = state_from_record(record)
    assert state.tray_exhausted
    game = BlockBlastGame(GameConfig(random_seed=1), state=state)
    assert game.state.used == [False, False, False]
    assert all(s is not None for s in game.state.tray)


def test_corrupt_history_is_dropped() -> None:
    record = state_to_record(played_game().state)
    record["history"][1]["slot"] = 7
    state = state_from_record(record)
    assert len(state.history) == 0
    assert state.score == 9


def test_non_object_record_starts_fresh() -> None:
    state = state_from_record([1, 2, 3])
    assert state.score == 0
    assert state.tray_exhausted


def test_clear_removes_file(tmp_path) -> None:
    store = GameStore(tmp_path / "nested" / "save.json")
    store.save(make_game().state)
    assert store.path.exists()
    store.clear()
    assert not store.path.exists()
    store.clear()


@pytest.mark.parametrize("bad_cell", [2**70, 10**30, float("inf"), float("nan"), -1, 2])
def test_out_of_range_board_cells_fall_back_to_empty_board(bad_cell, caplog) -> None:
    record = state_to_record(played_game().state)
    record["board"][0][0] = bad_cell
    with caplog.at_level(logging.WARNING, logger="block_blast.game.persistence"):
        state = state_from_record(record)
    assert state.board.filled_count() == 0
    assert len(state.history) == 2
    assert state.score == 9
    assert "saved board is missing or corrupt" in caplog.text


@pytest.mark.parametrize("bad_cell", [2**70, 10**30, float("inf")])
def test_out_of_range_history_cells_drop_history(bad_cell) -> None:
    game = played_game()
    record = state_to_record(game.state)
    record["history"][0]["board"][9][9] = bad_cell
    state = state_from_record(record)
    assert len(state.history) == 0
    assert np.array_equal(state.board.grid, game.state.board.grid)


def test_infinity_in_saved_file_loads_with_defaults(tmp_path) -> None:
    game = played_game()
    record = state_to_record(game.state)
    record["board"][3][3] = float("inf")
    record["history"][1]["board"][0][0] = float("inf")
    path = tmp_path / "save.json"
    path.write_text(json.dumps(record), encoding="utf-8")
    assert "Infinity" in path.read_text(encoding="utf-8")

    loaded = GameStore(path).load()
    assert loaded is not None
    assert loaded.board.filled_count() == 0
    assert len(loaded.history) == 0
    assert loaded.tray == game.state.tray
    assert loaded.score == 9


@pytest.mark.parametrize("bad_cell", [1.9, 1.0, True, "1", None])
def test_non_integer_board_cells_are_rejected(bad_cell) -> None:
    record = state_to_record(played_game().state)
    record["board"][0][0] = bad_cell
    state = state_from_record(record)
    assert state.board.filled_count() == 0


@pytest.mark.parametrize("used", [[7, 0, 0], [1, 0, 1], [True, "no", False]])
def test_non_boolean_used_flags_redeal_the_tray(used, caplog) -> None:
    record = state_to_record(played_game().state)
    record["used"] = used
    with caplog.at_level(logging.WARNING, logger="block_blast.game.persistence"):
        state = state_from_record(record)
    assert state.tray_exhausted
    assert state.tray == [None, None, None]
    assert "saved tray is missing or corrupt" in caplog.text
