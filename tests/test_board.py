import unittest

from tictactoe.board import Board, Cell, GameSymbol, Move
from tictactoe.errors import IllegalMoveError, OutOfRangeError

from tests.helpers import fill


class BoardTests(unittest.TestCase):
    def test_fresh_board_is_empty_everywhere(self):
        for n in (1, 3, 5):
            board = Board(n, n)
            self.assertEqual(len(board.available_cells()), n * n)
            for r in range(n):
                for c in range(n):
                    self.assertTrue(board.is_empty(r, c))

    def test_cell_coordinates_match_grid_position(self):
        board = Board(3, 4)
        for r, row in enumerate(board.cells):
            for c, cell in enumerate(row):
                self.assertEqual((cell.row, cell.column), (r, c))

    def test_rejects_non_positive_dimensions(self):
        for rows, cols in ((0, 3), (3, 0), (-1, 2)):
            with self.assertRaises(ValueError):
                Board(rows, cols)

    def test_set_mark_changes_only_target_cell(self):
        board = Board(3, 3)
        before = [[cell for cell in row] for row in board.cells]
        board.set_mark(1, 2, GameSymbol.X)
        self.assertFalse(board.is_empty(1, 2))
        self.assertEqual(board.symbol_at(1, 2), "X")
        for r in range(3):
            for c in range(3):
                if (r, c) != (1, 2):
                    self.assertEqual(board.cells[r][c], before[r][c])

    def test_set_mark_on_occupied_cell_raises(self):
        board = Board(3, 3)
        board.set_mark(0, 0, "X")
        with self.assertRaises(IllegalMoveError) as ctx:
            board.set_mark(0, 0, "O")
        self.assertEqual((ctx.exception.row, ctx.exception.column), (0, 0))
        self.assertEqual(board.symbol_at(0, 0), "X")

    def test_out_of_range_queries_raise(self):
        board = Board(2, 2)
        with self.assertRaises(OutOfRangeError):
            board.is_empty(2, 0)
        with self.assertRaises(OutOfRangeError):
            board.set_mark(0, -1, "X")
        self.assertFalse(board.in_bounds(-1, 0))
        self.assertTrue(board.in_bounds(1, 1))

    def test_available_cells_are_row_major(self):
        board = fill(Board(3, 3), ["X-O", "-X-", "O--"])
        coords = [(c.row, c.column) for c in board.available_cells()]
        self.assertEqual(coords, [(0, 1), (1, 0), (1, 2), (2, 1), (2, 2)])

    def test_available_cells_do_not_alias_board_state(self):
        board = Board(2, 2)
        cell = board.available_cells()[0]
        board.set_mark(0, 0, "X")
        self.assertEqual(cell, Cell(0, 0, None))
        self.assertTrue(cell.is_empty())

    def test_copy_is_independent(self):
        board = fill(Board(3, 3), ["X--", "---", "---"])
        clone = board.copy()
        clone.set_mark(2, 2, "O")
        self.assertTrue(board.is_empty(2, 2))
        self.assertEqual(clone.symbol_at(0, 0), "X")

    def test_full_and_occupied_helpers(self):
        board = fill(Board(2, 2), ["XO", "OX"])
        self.assertTrue(board.is_full())
        self.assertEqual(len(board.occupied_cells("X")), 2)
        self.assertEqual(len(board.occupied_cells()), 4)

    def test_square_flag(self):
        self.assertTrue(Board(4, 4).is_square)
        self.assertFalse(Board(3, 4).is_square)

    def test_move_is_a_value(self):
        self.assertEqual(Move(1, 2), Move(1, 2))
        self.assertEqual(str(Move(1, 2)), "(1, 2)")


if __name__ == "__main__":
    unittest.main()
