import random
import tempfile

from django.test import SimpleTestCase

from game.engine import Wordlist, WordlistError, load_wordlist
from game.testing import write_wordlist


class WordlistTests(SimpleTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmpdir = self._tmp.name

    def test_load_keeps_file_order_and_membership(self):
        path = write_wordlist(self.tmpdir, ["crane", "apple", "zebra"])
        wordlist = load_wordlist(path)
        self.assertEqual(list(wordlist), ["crane", "apple", "zebra"])
        self.assertEqual(len(wordlist), 3)
        self.assertIn("apple", wordlist)
        self.assertNotIn("mango", wordlist)
        self.assertEqual(wordlist.path, path)

    def test_invalid_length_is_rejected(self):
        path = write_wordlist(self.tmpdir, ["crane", "apples"])
        with self.assertRaisesMessage(WordlistError, ":2: invalid word length"):
            load_wordlist(path)

    def test_non_lowercase_word_is_rejected(self):
        path = write_wordlist(self.tmpdir, ["Crane"])
        with self.assertRaisesMessage(WordlistError, "invalid word 'Crane'"):
            load_wordlist(path)

    def test_missing_file(self):
        with self.assertRaisesMessage(WordlistError, "Could not load wordlist"):
            load_wordlist(f"{self.tmpdir}/nope.txt")

    def test_empty_file(self):
        path = write_wordlist(self.tmpdir, [])
        with self.assertRaisesMessage(WordlistError, "is empty"):
            load_wordlist(path)

    def test_choose_requested_solution(self):
        wordlist = Wordlist(path="mem", words=("crane", "apple"))
        self.assertEqual(wordlist.choose_solution("apple"), "apple")

    def test_requested_solution_must_be_listed(self):
        wordlist = Wordlist(path="mem", words=("crane", "apple"))
        with self.assertRaisesMessage(WordlistError, "Invalid solution"):
            wordlist.choose_solution("mango")

    def test_random_solution_comes_from_the_list(self):
        wordlist = Wordlist(path="mem", words=("crane", "apple", "zebra"))
        rng = random.Random(7)
        for _ in range(20):
            self.assertIn(wordlist.choose_solution(rng=rng), wordlist)
