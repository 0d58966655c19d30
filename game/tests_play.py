import io
import logging
import tempfile
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, override_settings

from game.sample_player import main as sample_main
from game.sample_player import play as sample_play
from game.testing import write_sample_player, write_wordlist

WORDS = ["apple", "brave", "crane", "delta", "eager", "raven"]


class PlayCommandTests(SimpleTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.wordlist = write_wordlist(self._tmp.name, WORDS)

    def call(self, *args, stdin="", **options):
        out, err = io.StringIO(), io.StringIO()
        options.setdefault("wordlist", self.wordlist)
        call_command("play", *args, stdin=io.StringIO(stdin), stdout=out, stderr=err, no_color=True, **options)
        return out.getvalue(), err.getvalue()

    def test_terminal_win_prints_feedback_then_turns(self):
        out, _ = self.call(solution="crane", stdin="apple\nraven\ncrane\n")
        self.assertEqual(out.splitlines(), [
            "X   O",
            "XX XX",
            "OOOOO",
            "3",
        ])

    def test_terminal_guess_with_trailing_whitespace(self):
        out, _ = self.call(solution="crane", stdin="crane \t\n")
        self.assertEqual(out.splitlines(), ["OOOOO", "1"])

    def test_invalid_guess_fails_with_exit_code_one(self):
        with self.assertRaisesMessage(CommandError, "Invalid guess: zzzzz") as ctx:
            self.call(solution="crane", stdin="apple\nzzzzz\ncrane\n")
        self.assertEqual(ctx.exception.returncode, 1)

    def test_end_of_input_is_quiet(self):
        out, err = self.call(solution="crane", stdin="apple\n")
        self.assertEqual(out.splitlines(), ["X   O"])
        self.assertEqual(err, "")

    def test_solution_must_be_in_wordlist(self):
        with self.assertRaisesMessage(CommandError, "Invalid solution"):
            self.call(solution="mango", stdin="crane\n")

    def test_unreadable_wordlist(self):
        with self.assertRaisesMessage(CommandError, "Could not load wordlist"):
            self.call(wordlist=f"{self._tmp.name}/absent.txt")

    def test_random_solution_from_default_wordlist(self):
        single = write_wordlist(self._tmp.name, ["eager"], name="single.txt")
        with override_settings(GAME_WORDLIST_PATH=single):
            out, _ = self.call(wordlist=None, stdin="eager\n")
        self.assertEqual(out.splitlines(), ["OOOOO", "1"])

    def test_automated_player_wins(self):
        player = write_sample_player(self._tmp.name)
        out, _ = self.call(player, solution="raven")
        turns = int(out.splitlines()[-1])
        self.assertTrue(1 <= turns <= len(WORDS))
        # Feedback goes to the player, not to our stdout.
        self.assertEqual(len(out.splitlines()), 1)

    def test_automated_player_with_hard_and_verbose_flags(self):
        player = write_sample_player(self._tmp.name)
        with self.assertLogs("game", level="DEBUG") as logs:
            out, _ = self.call(player, solution="apple", hard=True, verbose=True)
        self.assertEqual(out.splitlines(), ["1"])
        self.assertIn("Solution: apple", "\n".join(logs.output))

    def test_verbose_run_leaves_log_level_unchanged(self):
        game_logger = logging.getLogger("game")
        level = game_logger.level
        self.call(solution="crane", stdin="crane\n", verbose=True)
        self.assertEqual(game_logger.level, level)
        self.call(solution="crane", stdin="crane\n")
        self.assertEqual(game_logger.level, level)

    def test_unspawnable_player(self):
        with self.assertRaisesMessage(CommandError, "Could not initialize program"):
            self.call(f"{self._tmp.name}/no-such-player", solution="crane")


class SamplePlayerTests(SimpleTestCase):
    def test_narrows_candidates_from_feedback(self):
        # Solution "crane": apple scores "X   O", which leaves brave and crane.
        stdin = io.StringIO("X   O\n OO O\nOOOOO\n")
        stdout = io.StringIO()
        guesses = sample_play(list(WORDS), stdin, stdout)
        self.assertEqual(guesses, 3)
        self.assertEqual(stdout.getvalue().splitlines(), ["apple", "brave", "crane"])

    def test_stops_at_end_of_feedback(self):
        stdout = io.StringIO()
        self.assertEqual(sample_play(list(WORDS), io.StringIO(""), stdout), 1)
        self.assertEqual(stdout.getvalue(), "apple\n")

    def test_stops_when_no_candidate_is_left(self):
        stdout = io.StringIO()
        self.assertEqual(sample_play(["apple"], io.StringIO("     \n"), stdout), 1)

    def test_verbose_player_reports_wordlist_load_once(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_wordlist(tmpdir, WORDS)
            with mock.patch("sys.stdin", io.StringIO("OOOOO\n")), mock.patch("sys.stdout", io.StringIO()), \
                    mock.patch("logging.basicConfig"), self.assertLogs("game", level="DEBUG") as logs:
                self.assertEqual(sample_main(["-v", "-w", path]), 0)
        self.assertEqual(sum("Loading wordlist" in line for line in logs.output), 1)
