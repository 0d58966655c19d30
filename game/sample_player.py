"""
Sample automated player for the ``play`` command.

Reads the wordlist named by ``-w``, prints one guess per line and reads the
glyph feedback line after each one. Candidates whose score against the last
guess disagrees with the feedback are dropped, so every guess is consistent
with everything seen so far (and therefore hard-mode legal).

    python manage.py play --wordlist word-list-5.txt wordle-sample-player
"""

import argparse
import logging
import sys

from game.engine import GameError, decode_feedback, is_solved, load_wordlist, score

logger = logging.getLogger("game.sample_player")


def build_parser():
    parser = argparse.ArgumentParser(prog="wordle-sample-player", description=__doc__.strip().splitlines()[0])
    parser.add_argument("-v", "--verbose", action="store_true", help="Turns on verbosity")
    parser.add_argument("-H", "--hard", action="store_true", help="Turns on hard mode")
    parser.add_argument("-w", "--wordlist", required=True, help="Specifies wordlist file")
    return parser


def play(candidates, stdin, stdout):
    """Guess until solved, out of input, or out of candidates. Returns guesses made."""
    guesses = 0
    while candidates:
        guess = candidates[0]
        stdout.write(guess + "\n")
        stdout.flush()
        guesses += 1

        line = stdin.readline()
        if not line:
            logger.debug("Feedback stream closed")
            break
        feedback = decode_feedback(line)
        if is_solved(feedback):
            logger.debug("Solved in %d guess(es): %s", guesses, guess)
            break
        candidates = [word for word in candidates[1:] if score(word, guess) == feedback]
        logger.debug("%d candidate(s) left", len(candidates))
    return guesses


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(message)s", stream=sys.stderr)
    try:
        wordlist = load_wordlist(args.wordlist)
        play(list(wordlist), sys.stdin, sys.stdout)
    except (GameError, ValueError) as exc:
        logger.error("%s", exc)
        return 1
    except BrokenPipeError:
        # The engine stops reading once the game is over.
        return 0
    return 0


if __name__ == "__main__":
    sys.exit(main())
