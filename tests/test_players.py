import unittest
from unittest.mock import MagicMock, patch

from tictactoe.board import Board, GameSymbol, Move
from tictactoe.game import GameBuilder, GameConfig, GameStatus
from tictactoe.players import Bot, HumanPlayer, PlayerBuilder, User, UserBuilder
from tictactoe.strategies import PlayingStrategy, RandomPlayingStrategy


class FixedStrategy(PlayingStrategy):
    name = "fixed"

    def __init__(self, move):
        self.move = move
        self.calls = 0

    def play(self, board):
        self.calls += 1
        return self.move


class SequenceStrategy(PlayingStrategy):
    name = "sequence"

    def __init__(self, moves):
        self.moves = list(moves)

    def play(self, board):
        return self.moves.pop(0)


def feeder(*lines):
    it = iter(lines)
    return lambda prompt="": next(it)


class HumanPlayerTests(unittest.TestCase):
    def test_reads_row_and_column(self):
        human = HumanPlayer(GameSymbol.O, input_fn=feeder("1 2"))
        self.assertEqual(human.play(Board(3, 3)), Move(1, 2))

    def test_reprompts_until_two_integers(self):
        output = MagicMock()
        human = HumanPlayer(GameSymbol.O, input_fn=feeder("", "middle", "2", "(2, 0)"), output_fn=output)
        self.assertEqual(human.play(Board(3, 3)), Move(2, 0))
        self.assertEqual(output.call_count, 3)

    def test_label_uses_username(self):
        user = User(username="bhargavi")
        self.assertEqual(HumanPlayer("O", user).label, "bhargavi (O)")
        self.assertEqual(HumanPlayer("O").label, "Human (O)")

    def test_game_reprompts_human_without_attempt_limit(self):
        output = MagicMock()
        human = HumanPlayer("X", input_fn=feeder("0 0", "1 1", "9 9", "0 1", "0 2"), output_fn=output)
        bot = Bot("O", SequenceStrategy([Move(1, 1), Move(2, 2)]))
        game = GameBuilder().with_player(human).with_player(bot).with_config(GameConfig(max_invalid_attempts=1)).build()
        with patch("builtins.print") as mock_print:
            status = game.play()
        self.assertEqual(status, GameStatus.ENDED)
        self.assertIs(game.winner, human)
        self.assertEqual([r["ok"] for r in game.records], [True, True, False, False, True, True, True])
        self.assertEqual(output.call_count, 2)
        self.assertTrue(output.call_args_list[0].args[0].startswith("Invalid move:"))
        mock_print.assert_not_called()


class BotTests(unittest.TestCase):
    def test_bot_delegates_to_strategy(self):
        strategy = FixedStrategy(Move(2, 2))
        bot = Bot(GameSymbol.X, strategy)
        self.assertEqual(bot.play(Board(3, 3)), Move(2, 2))
        self.assertEqual(strategy.calls, 1)
        self.assertIn("fixed", bot.label)


class BuilderTests(unittest.TestCase):
    def test_user_builder(self):
        user = UserBuilder().with_username("bhargavi").with_email("hey@example.com").with_photo(b"photo").build()
        self.assertEqual(user, User("bhargavi", "hey@example.com", b"photo"))

    def test_user_builder_requires_username(self):
        with self.assertRaises(ValueError):
            UserBuilder().with_email("a@b.c").build()

    def test_player_builder_makes_human_with_user(self):
        user = UserBuilder().with_username("sam").build()
        player = PlayerBuilder().with_symbol("O").with_user(user).build()
        self.assertIsInstance(player, HumanPlayer)
        self.assertEqual(player.symbol, "O")
        self.assertIs(player.user, user)

    def test_player_builder_wires_console_channels(self):
        output = MagicMock()
        user = UserBuilder().with_username("sam").build()
        player = PlayerBuilder().with_symbol("O").with_user(user).with_input(feeder("x", "1 1")).with_output(output).build()
        self.assertEqual(player.play(Board(3, 3)), Move(1, 1))
        output.assert_called_once()

    def test_player_builder_makes_bot_with_strategy(self):
        strategy = RandomPlayingStrategy()
        player = PlayerBuilder().with_symbol("X").with_playing_strategy(strategy).build()
        self.assertIsInstance(player, Bot)
        self.assertIs(player.playing_strategy, strategy)

    def test_last_variant_wins(self):
        user = UserBuilder().with_username("sam").build()
        player = PlayerBuilder().with_symbol("X").with_playing_strategy(RandomPlayingStrategy()).with_user(user).build()
        self.assertIsInstance(player, HumanPlayer)

    def test_player_builder_validation(self):
        with self.assertRaises(ValueError):
            PlayerBuilder().with_playing_strategy(RandomPlayingStrategy()).build()
        with self.assertRaises(ValueError):
            PlayerBuilder().with_symbol("X").build()


if __name__ == "__main__":
    unittest.main()
