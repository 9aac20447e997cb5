import unittest

from game import (
    BoardFullError,
    Direction,
    Grid,
    OutOfRangeError,
    RandomRange,
    Tile,
)


class TestGrid(unittest.TestCase):
    def test_given_grid_when_getting_cells_then_coordinates_match_and_bounds_enforced(self):
        grid = Grid(4, 3)
        self.assertEqual(grid.size, 12)
        cell = grid.get_cell(3, 2)
        self.assertEqual(cell.coord, (3, 2))
        self.assertFalse(cell.occupied)
        for x, y in [(-1, 0), (4, 0), (0, 3), (0, -1)]:
            with self.assertRaises(OutOfRangeError):
                grid.get_cell(x, y)
        # OutOfRangeError is also an IndexError
        with self.assertRaises(IndexError):
            grid.get_cell(10, 10)

    def test_given_invalid_dimensions_when_building_grid_then_value_error(self):
        with self.assertRaises(ValueError):
            Grid(0, 4)

    def test_given_corner_cell_when_getting_adjacent_then_none_off_grid(self):
        grid = Grid(4, 4)
        corner = grid.get_cell(0, 0)
        self.assertIsNone(grid.get_adjacent_cell(corner, Direction.UP))
        self.assertIsNone(grid.get_adjacent_cell(corner, Direction.LEFT))
        self.assertEqual(grid.get_adjacent_cell(corner, Direction.DOWN).coord, (0, 1))
        self.assertEqual(grid.get_adjacent_cell(corner, Direction.RIGHT).coord, (1, 0))
        far = grid.get_cell(3, 3)
        self.assertIsNone(grid.get_adjacent_cell(far, Direction.DOWN))
        self.assertIsNone(grid.get_adjacent_cell(far, Direction.RIGHT))
        self.assertEqual(len(list(grid.neighbors(grid.get_cell(1, 1)))), 4)
        self.assertEqual(len(list(grid.neighbors(corner))), 2)

    def test_given_occupied_cells_when_querying_empty_then_scan_order_respected(self):
        grid = Grid(2, 2)
        Tile(0).spawn(grid.get_cell(0, 0))
        self.assertEqual(grid.first_empty_cell().coord, (1, 0))
        self.assertEqual([c.coord for c in grid.empty_cells()], [(1, 0), (0, 1), (1, 1)])
        self.assertEqual([c.coord for c in grid.occupied_cells()], [(0, 0)])
        grid.clear()
        self.assertEqual(len(grid.empty_cells()), 4)

    def test_given_many_draws_when_picking_random_empty_cell_then_every_empty_cell_reachable(self):
        grid = Grid(3, 3)
        Tile(0).spawn(grid.get_cell(1, 1))
        rng = RandomRange(seed=11)
        seen = set()
        for _ in range(500):
            cell = grid.get_random_empty_cell(rng)
            self.assertFalse(cell.occupied)
            seen.add(cell.coord)
        self.assertEqual(len(seen), 8)
        self.assertNotIn((1, 1), seen)

    def test_given_full_grid_when_picking_random_empty_cell_then_board_full_error(self):
        grid = Grid(2, 1)
        Tile(0).spawn(grid.get_cell(0, 0))
        Tile(0).spawn(grid.get_cell(1, 0))
        self.assertIsNone(grid.first_empty_cell())
        with self.assertRaises(BoardFullError):
            grid.get_random_empty_cell(RandomRange(seed=1))


class TestDirection(unittest.TestCase):
    def test_given_each_direction_when_asking_traversal_then_destination_edge_first(self):
        self.assertEqual(Direction.UP.traversal(4, 4), (0, 1, 1, 1))
        self.assertEqual(Direction.LEFT.traversal(4, 4), (1, 1, 0, 1))
        self.assertEqual(Direction.DOWN.traversal(4, 4), (0, 1, 2, -1))
        self.assertEqual(Direction.RIGHT.traversal(4, 4), (2, -1, 0, 1))
        self.assertEqual(Direction.RIGHT.traversal(5, 3), (3, -1, 0, 1))
        self.assertEqual(Direction.DOWN.traversal(5, 3), (0, 1, 1, -1))

    def test_given_text_when_parsing_direction_then_names_and_keys_accepted(self):
        self.assertIs(Direction.parse('up'), Direction.UP)
        self.assertIs(Direction.parse(' LEFT '), Direction.LEFT)
        self.assertIs(Direction.parse('w'), Direction.UP)
        self.assertIs(Direction.parse('a'), Direction.LEFT)
        self.assertIs(Direction.parse('S'), Direction.DOWN)
        self.assertIs(Direction.parse('d'), Direction.RIGHT)
        with self.assertRaises(ValueError):
            Direction.parse('diagonal')


if __name__ == '__main__':
    unittest.main(verbosity=2)
