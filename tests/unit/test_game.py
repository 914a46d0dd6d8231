"""
Unit tests for the Game loop.

Tests key dispatch, state transitions, redraw output and end messages.
"""
import io

from minesweeper import Board, BoardConfig, Game, GameState


def press(game: Game, keys: bytes) -> GameState:
    """Feed a sequence of single-byte keys to the game."""
    state = game.state
    for key in keys:
        state = game.handle_key(bytes([key]))
    return state


# ============================================================================
# Key Dispatch Tests
# ============================================================================

class TestKeyDispatch:
    """Test how keys map to board actions."""

    def test_quit_key(self, corner_bomb_game: Game, output: io.StringIO) -> None:
        """Quit ends the game without a redraw."""
        assert corner_bomb_game.handle_key(b"q") == GameState.QUIT
        assert output.getvalue() == ""

    def test_move_keys(self, corner_bomb_game: Game) -> None:
        press(corner_bomb_game, b"ssd")
        assert corner_bomb_game.board.cursor == (2, 1)
        press(corner_bomb_game, b"wa")
        assert corner_bomb_game.board.cursor == (1, 0)

    def test_move_stops_at_edges(self, corner_bomb_game: Game) -> None:
        press(corner_bomb_game, b"wwaa")
        assert corner_bomb_game.board.cursor == (0, 0)
        press(corner_bomb_game, b"ssssssdddddd")
        assert corner_bomb_game.board.cursor == (4, 4)

    def test_flag_key(self, corner_bomb_game: Game) -> None:
        corner_bomb_game.handle_key(b"f")
        assert corner_bomb_game.board.cell(0, 0).is_flagged
        corner_bomb_game.handle_key(b"f")
        assert corner_bomb_game.board.cell(0, 0).is_closed

    def test_unknown_key_is_ignored(
        self, corner_bomb_game: Game, output: io.StringIO
    ) -> None:
        """Other bytes change nothing but still redraw."""
        assert corner_bomb_game.handle_key(b"x") == GameState.PLAYING
        assert corner_bomb_game.board.cursor == (0, 0)
        assert output.getvalue().startswith("\033[5A\033[15D")


# ============================================================================
# First Step Tests
# ============================================================================

class TestFirstStep:
    """Test deferred bomb placement."""

    def test_first_open_places_bombs(self, output: io.StringIO) -> None:
        board = Board(BoardConfig(10, 10, 10), seed=8)
        game = Game(board, output=output)
        assert game.handle_key(b" ") == GameState.PLAYING
        assert board.is_randomized
        assert board.bombs_placed == 10
        assert game.first_step is False

    def test_first_open_never_loses(self) -> None:
        for seed in range(30):
            board = Board(BoardConfig(5, 5, 90), seed=seed)
            game = Game(board, output=io.StringIO())
            press(game, b"ss dd")
            assert game.state == GameState.PLAYING

    def test_flag_before_first_open_does_not_win(
        self, output: io.StringIO
    ) -> None:
        """A board without bombs yet cannot be won by flagging."""
        game = Game(Board(BoardConfig(5, 5, 0)), output=output)
        assert game.handle_key(b"f") == GameState.PLAYING

    def test_preplaced_bombs_are_kept(self, corner_bomb_game: Game) -> None:
        corner_bomb_game.handle_key(b" ")
        assert corner_bomb_game.board.bombs_placed == 1
        assert corner_bomb_game.board.cell(4, 4).is_bomb


# ============================================================================
# End State Tests
# ============================================================================

class TestGameEnd:
    """Test win and loss transitions."""

    def test_opening_bomb_loses(
        self, corner_bomb_game: Game, output: io.StringIO
    ) -> None:
        state = press(corner_bomb_game, b"ssssdddd ")
        assert state == GameState.LOST
        text = output.getvalue()
        assert text.endswith("Game Over\n")
        assert "@" in text

    def test_flagging_every_bomb_wins(
        self, corner_bomb_game: Game, output: io.StringIO
    ) -> None:
        state = press(corner_bomb_game, b" ssssddddf")
        assert state == GameState.WON
        text = output.getvalue()
        assert text.endswith("You win!\n")
        assert "@" not in text

    def test_empty_board_wins_on_flag_after_open(
        self, output: io.StringIO
    ) -> None:
        game = Game(Board(BoardConfig(5, 5, 0)), output=output)
        assert game.handle_key(b" ") == GameState.PLAYING
        # any flag toggle re-checks the win; no bombs means won
        assert game.handle_key(b"f") == GameState.WON

    def test_keys_after_end_are_ignored(
        self, corner_bomb_game: Game, output: io.StringIO
    ) -> None:
        press(corner_bomb_game, b"ssssdddd ")
        written = output.getvalue()
        assert corner_bomb_game.handle_key(b"w") == GameState.LOST
        assert corner_bomb_game.board.cursor == (4, 4)
        assert output.getvalue() == written

    def test_end_redraw_repositions_cursor(
        self, corner_bomb_game: Game, output: io.StringIO
    ) -> None:
        corner_bomb_game.handle_key(b" ")
        output.truncate(0)
        output.seek(0)
        press(corner_bomb_game, b"ssssddddf")
        last_frame = output.getvalue().rsplit("\033[5A\033[15D", 1)[1]
        assert last_frame.splitlines()[-1] == "You win!"
        assert last_frame.splitlines()[4].endswith("[?]")


# ============================================================================
# Run Loop Tests
# ============================================================================

class TestRun:
    """Test the blocking run loop."""

    def test_run_until_quit(
        self, corner_bomb_game: Game, output: io.StringIO
    ) -> None:
        keys = iter([b"d", b"s", b"q", b"s"])
        assert corner_bomb_game.run(lambda: next(keys)) == GameState.QUIT
        assert corner_bomb_game.board.cursor == (1, 1)
        assert output.getvalue().startswith("[.]")

    def test_run_prints_initial_board(self, output: io.StringIO) -> None:
        board = Board(BoardConfig(5, 5, 10), seed=2)
        game = Game(board, output=output)
        keys = iter([b"q"])
        game.run(lambda: next(keys))
        assert output.getvalue() == board.render()

    def test_end_of_input_quits(self, corner_bomb_game: Game) -> None:
        assert corner_bomb_game.run(lambda: b"") == GameState.QUIT

    def test_run_until_loss(self, corner_bomb_game: Game) -> None:
        keys = iter(bytes([key]) for key in b"ssssdddd ")
        assert corner_bomb_game.run(lambda: next(keys)) == GameState.LOST

    def test_nul_byte_is_ignored(self, corner_bomb_game: Game) -> None:
        keys = iter([b"\0", b"q"])
        assert corner_bomb_game.run(lambda: next(keys)) == GameState.QUIT
