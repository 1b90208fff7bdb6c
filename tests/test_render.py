import unittest
from unittest.mock import patch

from tictactoe.board import Board
from tictactoe.render import print_board, render_board

from tests.helpers import fill


class RenderTests(unittest.TestCase):
    def test_renders_marks_and_empty_cells(self):
        board = fill(Board(2, 3), ["X-O", "--X"])
        lines = render_board(board).splitlines()
        self.assertEqual(len(lines), 3)
        self.assertEqual(lines[1], " 0 | X | - | O |")
        self.assertEqual(lines[2], " 1 | - | - | X |")
        self.assertIn("0", lines[0])
        self.assertIn("2", lines[0])

    def test_highlight_wraps_cells(self):
        board = fill(Board(1, 3), ["XXX"])
        line = render_board(board, highlight=[(0, 0), (0, 1), (0, 2)]).splitlines()[1]
        self.assertEqual(line, " 0 |[X]|[X]|[X]|")

    def test_render_does_not_mutate(self):
        board = fill(Board(3, 3), ["X--", "---", "--O"])
        before = str(board)
        render_board(board)
        self.assertEqual(str(board), before)

    def test_print_board(self):
        with patch("builtins.print") as mock_print:
            print_board(Board(1, 1))
        mock_print.assert_called_once()


if __name__ == "__main__":
    unittest.main()
