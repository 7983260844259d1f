import numpy as np

from lifestamp import rules


def test_conway_rules_table():
    for n in range(9):
        assert rules.conway_rules(False, n) == (n == 3)
        assert rules.conway_rules(True, n) == (n in (2, 3))


def test_moore_neighborhood_ignores_center_and_does_not_wrap():
    grid = np.ones((3, 3), dtype=bool)
    assert rules.moore_neighborhood(grid, 1, 1) == 8
    assert rules.moore_neighborhood(grid, 0, 0) == 3
    assert rules.moore_neighborhood(grid, 1, 0) == 5

    grid = np.zeros((4, 4), dtype=bool)
    grid[0, 3] = True
    # (0, 0) would see (3, 0) if the edges wrapped
    assert rules.moore_neighborhood(grid, 0, 0) == 0


def test_neighbor_counts_matches_scalar_count():
    rng = np.random.default_rng(7)
    grid = rng.random((9, 13)) < 0.4
    counts = rules.neighbor_counts(grid)
    for y in range(9):
        for x in range(13):
            assert counts[y, x] == rules.moore_neighborhood(grid, x, y)


def test_neighbor_counts_single_cell_grid():
    grid = np.ones((1, 1), dtype=bool)
    assert rules.neighbor_counts(grid)[0, 0] == 0


def test_next_generation_leaves_input_untouched():
    grid = np.zeros((5, 5), dtype=bool)
    grid[2, 1:4] = True
    before = grid.copy()

    nxt = rules.next_generation(grid)

    assert np.array_equal(grid, before)
    assert nxt is not grid
    expected = np.zeros((5, 5), dtype=bool)
    expected[1:4, 2] = True
    assert np.array_equal(nxt, expected)
