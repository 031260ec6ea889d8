import pytest

from falling_block.game import Board, GameConfig, PieceController, ShapeKind, collides


def test_defaults():
    cfg = GameConfig()
    assert (cfg.cols, cfg.rows, cfg.tick_interval_ms) == (10, 20, 500)
    assert cfg.random_seed is None


def test_from_dict_accepts_camel_case():
    cfg = GameConfig.from_dict({"cols": 12, "rows": 22, "tickIntervalMs": 250})
    assert (cfg.cols, cfg.rows, cfg.tick_interval_ms) == (12, 22, 250)
    assert GameConfig.from_dict({"tick_interval_ms": 100}).tick_interval_ms == 100


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError):
        GameConfig.from_dict({"level": 3})


@pytest.mark.parametrize(
    "kwargs",
    [
        {"cols": 0},
        {"rows": -1},
        {"rows": 1},
        {"tick_interval_ms": 0},
        {"cols": 3},
        {"rows": 2.5},
        {"tick_interval_ms": True},
    ],
)
def test_invalid_values_raise(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_shortest_allowed_board_spawns_every_piece_clear_of_the_floor():
    cfg = GameConfig(rows=2)
    ctl = PieceController(Board(cfg.cols, cfg.rows))
    for kind in ShapeKind:
        piece = ctl.spawn(kind)
        assert not collides(piece.shape, piece.x, piece.y, ctl.board)
        while ctl.drop():
            pass
    assert ctl.pieces_locked == len(ShapeKind)
