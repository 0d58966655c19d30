import io
import json
import os
import subprocess
import tempfile
from unittest import mock

from django.test import SimpleTestCase

from game.engine import (
    FeedbackDeliveryError,
    GuessReadError,
    GuesserChannel,
    InteractiveChannel,
    LetterScore,
    PlayerSpawnError,
    PlayerTerminationError,
    ProcessChannel,
    get_channel,
)
from game.testing import write_player

H, S, N = LetterScore.HERE, LetterScore.SOMEWHERE, LetterScore.NOWHERE

ECHO_ARGV_PLAYER = """\
import json, sys
with open(sys.argv[-1], "w") as fh:
    json.dump(sys.argv[1:], fh)
"""

ONE_GUESS_PLAYER = """\
import sys
print("crane", flush=True)
feedback = sys.stdin.readline()
print("feedback:" + feedback.rstrip("\\n"), flush=True)
sys.stdin.readline()
"""

BLOCKING_PLAYER = """\
import sys
print("crane", flush=True)
sys.stdin.readline()
"""


class BrokenStream(io.StringIO):
    def readline(self, *args):
        raise OSError("device gone")

    def write(self, s):
        raise BrokenPipeError("pipe closed")


class InteractiveChannelTests(SimpleTestCase):
    def test_reads_lines_and_strips_trailing_whitespace(self):
        channel = InteractiveChannel(stdin=io.StringIO("crane  \napple\n"), stdout=io.StringIO())
        self.assertEqual(channel.read_guess(), "crane")
        self.assertEqual(channel.read_guess(), "apple")
        self.assertIsNone(channel.read_guess())

    def test_writes_one_glyph_line_per_feedback(self):
        out = io.StringIO()
        channel = InteractiveChannel(stdin=io.StringIO(), stdout=out)
        channel.write_feedback((H, S, N, N, H))
        channel.write_feedback((H,) * 5)
        self.assertEqual(out.getvalue(), "OX  O\nOOOOO\n")

    def test_styles_decorate_glyphs(self):
        out = io.StringIO()
        styles = {H: str.lower, S: lambda g: g * 2}
        InteractiveChannel(stdin=io.StringIO(), stdout=out, styles=styles).write_feedback((H, S, N, H, N))
        self.assertEqual(out.getvalue(), "oXX o \n")

    def test_io_failures_are_reported(self):
        channel = InteractiveChannel(stdin=BrokenStream(), stdout=BrokenStream())
        with self.assertRaises(GuessReadError):
            channel.read_guess()
        with self.assertRaises(FeedbackDeliveryError):
            channel.write_feedback((N,) * 5)

    def test_satisfies_channel_protocol(self):
        self.assertIsInstance(InteractiveChannel(stdin=io.StringIO()), GuesserChannel)


class ProcessChannelTests(SimpleTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmpdir = self._tmp.name

    def test_forwards_flags_before_extra_arguments(self):
        program = write_player(self.tmpdir, ECHO_ARGV_PLAYER)
        record = os.path.join(self.tmpdir, "argv.json")
        with ProcessChannel(program, ["--fast", record], wordlist_path="words.txt",
                            hard=True, verbose=True) as channel:
            self.assertIsNone(channel.read_guess())
        with open(record) as fh:
            self.assertEqual(json.load(fh), ["-H", "-v", "-w", "words.txt", "--fast", record])

    def test_flags_are_omitted_when_unset(self):
        program = write_player(self.tmpdir, ECHO_ARGV_PLAYER)
        record = os.path.join(self.tmpdir, "argv.json")
        with ProcessChannel(program, [record], wordlist_path="words.txt") as channel:
            channel.read_guess()
        with open(record) as fh:
            self.assertEqual(json.load(fh), ["-w", "words.txt", record])

    def test_round_trip_over_pipes(self):
        program = write_player(self.tmpdir, ONE_GUESS_PLAYER)
        with ProcessChannel(program, wordlist_path="words.txt") as channel:
            self.assertEqual(channel.read_guess(), "crane")
            channel.write_feedback((N, S, N, N, H))
            self.assertEqual(channel.read_guess(), "feedback: X  O")
        self.assertTrue(channel.closed)
        self.assertIsNotNone(channel.process.returncode)

    def test_child_is_reaped_when_block_raises(self):
        program = write_player(self.tmpdir, BLOCKING_PLAYER)
        with self.assertRaisesMessage(RuntimeError, "boom"):
            with ProcessChannel(program, wordlist_path="words.txt") as channel:
                self.assertEqual(channel.read_guess(), "crane")
                raise RuntimeError("boom")
        self.assertTrue(channel.closed)
        self.assertIsNotNone(channel.process.returncode)

    def test_close_is_idempotent(self):
        program = write_player(self.tmpdir, BLOCKING_PLAYER)
        channel = ProcessChannel(program, wordlist_path="words.txt")
        channel.close()
        returncode = channel.process.returncode
        channel.close()
        self.assertIsNotNone(returncode)
        self.assertEqual(channel.process.returncode, returncode)

    def test_operations_after_close_are_rejected(self):
        program = write_player(self.tmpdir, BLOCKING_PLAYER)
        channel = ProcessChannel(program, wordlist_path="words.txt")
        channel.close()
        with self.assertRaises(ValueError):
            channel.read_guess()

    def test_spawn_failure(self):
        with self.assertRaisesMessage(PlayerSpawnError, "Could not initialize program"):
            ProcessChannel(os.path.join(self.tmpdir, "missing"), wordlist_path="words.txt")

    def test_write_after_child_exit_is_a_delivery_failure(self):
        program = write_player(self.tmpdir, "")
        with ProcessChannel(program, wordlist_path="words.txt") as channel:
            self.assertIsNone(channel.read_guess())
            channel.process.wait()
            with self.assertRaises(FeedbackDeliveryError):
                channel.write_feedback((N,) * 5)

    def test_termination_failure_is_raised(self):
        program = write_player(self.tmpdir, BLOCKING_PLAYER)
        channel = ProcessChannel(program, wordlist_path="words.txt")
        self.addCleanup(channel.process.wait)
        with mock.patch.object(channel.process, "wait", side_effect=OSError("no such child")):
            with self.assertRaisesMessage(PlayerTerminationError, "no such child"):
                channel.close()
        self.assertTrue(channel.closed)

    def test_termination_failure_keeps_earlier_error_visible(self):
        program = write_player(self.tmpdir, BLOCKING_PLAYER)
        with self.assertLogs("game.engine.channels", level="ERROR") as logs:
            with self.assertRaises(PlayerTerminationError):
                with ProcessChannel(program, wordlist_path="words.txt") as channel:
                    self.addCleanup(channel.process.wait)
                    mock.patch.object(channel.process, "wait", side_effect=OSError("stuck")).start()
                    self.addCleanup(mock.patch.stopall)
                    raise FeedbackDeliveryError("player went away")
        self.assertIn("player went away", "\n".join(logs.output))

    def test_player_stderr_is_shown_only_when_verbose(self):
        program = write_player(self.tmpdir, "")
        for verbose, expected in [(True, None), (False, subprocess.DEVNULL)]:
            with mock.patch("game.engine.channels.subprocess.Popen", wraps=subprocess.Popen) as popen:
                with ProcessChannel(program, wordlist_path="words.txt", verbose=verbose) as channel:
                    channel.read_guess()
            self.assertEqual(popen.call_args.kwargs["stderr"], expected)


class GetChannelTests(SimpleTestCase):
    def test_no_program_selects_terminal(self):
        channel = get_channel([], wordlist_path="words.txt", stdin=io.StringIO())
        self.assertIsInstance(channel, InteractiveChannel)

    def test_program_selects_process(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            program = write_player(tmpdir, "")
            with get_channel([program], wordlist_path="words.txt") as channel:
                self.assertIsInstance(channel, ProcessChannel)
                self.assertEqual(channel.argv, [program, "-w", "words.txt"])
