import tempfile
from unittest import mock

from django.test import SimpleTestCase

from game.engine import (
    FeedbackDeliveryError,
    GuessReadError,
    LetterScore,
    ProcessChannel,
    Session,
    SessionState,
    load_wordlist,
)
from game.engine import scoring
from game.testing import write_sample_player, write_wordlist

WORDS = ["apple", "brave", "crane", "delta", "eager", "flame", "grape", "raven"]


class ScriptedChannel:
    """Feeds canned guesses and records the feedback written back."""

    def __init__(self, guesses, fail_read=False, fail_write=False):
        self.guesses = list(guesses)
        self.feedback = []
        self.fail_read = fail_read
        self.fail_write = fail_write
        self.closed = False

    def read_guess(self):
        if self.fail_read:
            raise GuessReadError("unreadable")
        return self.guesses.pop(0) if self.guesses else None

    def write_feedback(self, feedback):
        if self.fail_write:
            raise FeedbackDeliveryError("gone")
        self.feedback.append(feedback)

    def close(self):
        self.closed = True


class SessionTests(SimpleTestCase):
    def test_win_reports_turn_count(self):
        channel = ScriptedChannel(["apple", "brave", "crane", "delta"])
        session = Session("crane", set(WORDS), channel)
        result = session.play()
        self.assertEqual(result.state, SessionState.WON)
        self.assertTrue(result.is_won)
        self.assertEqual(result.turns, 3)
        self.assertEqual(result.guess, "crane")
        self.assertEqual(session.state, SessionState.WON)
        self.assertEqual(len(channel.feedback), 3)
        self.assertEqual(channel.feedback[-1], (LetterScore.HERE,) * 5)
        # The guess after the win is never read.
        self.assertEqual(channel.guesses, ["delta"])

    def test_first_guess_win(self):
        result = Session("crane", set(WORDS), ScriptedChannel(["crane"])).play()
        self.assertEqual((result.state, result.turns), (SessionState.WON, 1))

    def test_unknown_word_ends_without_scoring(self):
        channel = ScriptedChannel(["apple", "zzzzz", "crane"])
        with mock.patch("game.engine.session.score", wraps=scoring.score) as scorer:
            result = Session("crane", set(WORDS), channel).play()
        self.assertEqual(result.state, SessionState.INVALID_GUESS)
        self.assertEqual(result.guess, "zzzzz")
        self.assertEqual(result.turns, 2)
        scorer.assert_called_once_with("crane", "apple")
        self.assertEqual(len(channel.feedback), 1)

    def test_invalid_first_guess_never_scores(self):
        with mock.patch("game.engine.session.score") as scorer:
            result = Session("crane", set(WORDS), ScriptedChannel(["CRANE"])).play()
        self.assertEqual(result.state, SessionState.INVALID_GUESS)
        scorer.assert_not_called()

    def test_end_of_input_is_quiet(self):
        channel = ScriptedChannel(["apple", "brave"])
        result = Session("crane", set(WORDS), channel).play()
        self.assertEqual(result.state, SessionState.STREAM_ENDED)
        self.assertEqual(result.turns, 2)
        self.assertIsNone(result.guess)
        self.assertFalse(result.is_won)

    def test_read_failure_ends_like_end_of_input(self):
        with self.assertLogs("game.engine.session", level="WARNING"):
            result = Session("crane", set(WORDS), ScriptedChannel([], fail_read=True)).play()
        self.assertEqual((result.state, result.turns), (SessionState.STREAM_ENDED, 0))

    def test_write_failure_is_fatal(self):
        session = Session("crane", set(WORDS), ScriptedChannel(["apple"], fail_write=True))
        with self.assertRaises(FeedbackDeliveryError):
            session.play()
        self.assertEqual(session.state, SessionState.PLAYING)

    def test_finished_session_cannot_be_replayed(self):
        session = Session("crane", set(WORDS), ScriptedChannel(["crane"]))
        session.play()
        with self.assertRaises(RuntimeError):
            session.play()


class AutomatedPlayerSessionTests(SimpleTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.wordlist = load_wordlist(write_wordlist(self._tmp.name, WORDS))
        self.player = write_sample_player(self._tmp.name)

    def play(self, solution, wordlist=None):
        wordlist = wordlist or self.wordlist
        with ProcessChannel(self.player, wordlist_path=wordlist.path) as channel:
            result = Session(solution, wordlist, channel).play()
        return result, channel

    def test_sample_player_wins_and_is_reaped(self):
        result, channel = self.play("raven")
        self.assertEqual(result.state, SessionState.WON)
        self.assertEqual(result.guess, "raven")
        self.assertTrue(channel.closed)
        self.assertIsNotNone(channel.process.returncode)

    def test_first_word_wins_in_one(self):
        result, _ = self.play("apple")
        self.assertEqual((result.state, result.turns), (SessionState.WON, 1))

    def test_player_using_another_list_is_invalid_and_reaped(self):
        engine_words = load_wordlist(write_wordlist(self._tmp.name, ["crane", "brave"], name="engine.txt"))
        with ProcessChannel(self.player, wordlist_path=self.wordlist.path) as channel:
            result = Session("crane", engine_words, channel).play()
        self.assertEqual(result.state, SessionState.INVALID_GUESS)
        self.assertEqual(result.guess, "apple")
        self.assertIsNotNone(channel.process.returncode)

    def test_player_that_quits_ends_stream_and_is_reaped(self):
        # The later --wordlist wins, so the player fails to load and exits without guessing.
        missing = f"{self._tmp.name}/missing.txt"
        with ProcessChannel(self.player, ["--wordlist", missing], wordlist_path=self.wordlist.path) as channel:
            result = Session("crane", self.wordlist, channel).play()
        self.assertEqual(result.state, SessionState.STREAM_ENDED)
        self.assertIsNotNone(channel.process.returncode)
