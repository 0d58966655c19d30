from collections import Counter

from django.test import SimpleTestCase

from game.engine import LetterScore, decode_feedback, encode_feedback, is_solved, score

H, S, N = LetterScore.HERE, LetterScore.SOMEWHERE, LetterScore.NOWHERE

WORDS = ["quata", "quass", "moroc", "mormo", "crane", "eerie", "there", "abbey", "babes", "speed", "erase"]


class ScoreTests(SimpleTestCase):
    def test_reference_examples(self):
        self.assertEqual(score("quata", "quass"), (H, H, H, N, N))
        self.assertEqual(score("moroc", "mormo"), (H, H, H, N, S))

    def test_identical_word_is_all_here(self):
        for word in WORDS:
            self.assertEqual(score(word, word), (H,) * 5)

    def test_exact_match_is_not_reused_as_somewhere(self):
        # The final 'e' is claimed exactly, so the two leading 'e's find nothing.
        self.assertEqual(score("crane", "eerie"), (N, N, S, N, H))

    def test_surplus_letters_go_to_earliest_guess_position(self):
        self.assertEqual(score("there", "eerie"), (S, N, S, N, H))

    def test_swapped_duplicates(self):
        self.assertEqual(score("abbey", "babes"), (S, S, H, H, N))

    def test_letter_absent_from_solution(self):
        self.assertEqual(score("crane", "ghost"), (N,) * 5)

    def test_marked_count_matches_shared_letters(self):
        for solution in WORDS:
            for guess in WORDS:
                marked = sum(1 for slot in score(solution, guess) if slot is not N)
                shared = sum((Counter(solution) & Counter(guess)).values())
                self.assertEqual(marked, shared, (solution, guess))

    def test_feedback_is_immutable(self):
        feedback = score("crane", "eerie")
        self.assertIsInstance(feedback, tuple)
        self.assertEqual(len(feedback), 5)

    def test_malformed_words_fail_fast(self):
        for solution, guess in [("cran", "crane"), ("crane", "cranes"), ("CRANE", "crane"),
                                ("crane", "cr4ne"), ("crâne", "crane")]:
            with self.assertRaises(ValueError):
                score(solution, guess)

    def test_is_solved(self):
        self.assertTrue(is_solved((H,) * 5))
        self.assertFalse(is_solved((H, H, H, H, S)))


class FeedbackCodecTests(SimpleTestCase):
    def test_encode_uses_protocol_glyphs(self):
        self.assertEqual(encode_feedback((H, S, N, N, H)), "OX  O")

    def test_encode_applies_styles_to_marked_glyphs_only(self):
        styles = {H: lambda g: f"<{g}>", S: lambda g: f"[{g}]", N: lambda g: "never"}
        self.assertEqual(encode_feedback((H, S, N, H, N), styles), "<O>[X] <O> ")

    def test_decode_keeps_blank_slots(self):
        self.assertEqual(decode_feedback("  X O\n"), (N, N, S, N, H))
        self.assertEqual(decode_feedback("     \r\n"), (N,) * 5)

    def test_decode_rejects_malformed_lines(self):
        for line in ["OOOO\n", "OOOOOO\n", "OXYOO\n"]:
            with self.assertRaises(ValueError):
                decode_feedback(line)
