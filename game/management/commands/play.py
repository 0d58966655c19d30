import argparse
import logging
import sys

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from game.engine import (
    DEFAULT_WORDLIST_PATH,
    GameError,
    LetterScore,
    Session,
    SessionState,
    get_channel,
    load_wordlist,
)


class Command(BaseCommand):
    help = (
        "Play one round of the five-letter word guessing game. Guesses are read "
        "from the terminal, or from an automated player program given after the "
        "options. Prints the number of guesses taken on a win."
    )
    requires_system_checks = []
    stealth_options = ("stdin",)

    def create_parser(self, prog_name, subcommand, **kwargs):
        # -v means --verbose here; Django's --verbosity keeps its long form.
        kwargs.setdefault("conflict_handler", "resolve")
        return super().create_parser(prog_name, subcommand, **kwargs)

    def add_arguments(self, parser):
        parser.add_argument("-v", "--verbose", action="store_true",
                            help="Print diagnostics to stderr and forward -v to the player.")
        parser.add_argument("-H", "--hard", action="store_true",
                            help="Turn on hard mode (forwarded to the player as -H).")
        parser.add_argument("-w", "--wordlist", default=None,
                            help="Wordlist file. Default: the GAME_WORDLIST_PATH setting.")
        parser.add_argument("-s", "--solution", default=None,
                            help="Play with this solution instead of a random word.")
        parser.add_argument("program", nargs=argparse.REMAINDER,
                            help="Player program and its arguments; default is to play on the terminal.")

    def handle(self, *args, **options):
        game_logger = logging.getLogger("game")
        level = game_logger.level
        if options["verbose"]:
            game_logger.setLevel(logging.DEBUG)
        try:
            self.play(options)
        finally:
            game_logger.setLevel(level)

    def play(self, options):
        verbose = options["verbose"]
        log = logging.getLogger(__name__)

        wordlist_path = options["wordlist"] or getattr(settings, "GAME_WORDLIST_PATH", DEFAULT_WORDLIST_PATH)
        try:
            wordlist = load_wordlist(wordlist_path)
            solution = wordlist.choose_solution(options["solution"])
        except GameError as exc:
            raise CommandError(str(exc)) from exc
        log.debug("Solution: %s", solution)

        styles = {
            LetterScore.HERE: self.style.SUCCESS,
            LetterScore.SOMEWHERE: self.style.WARNING,
        }
        try:
            with get_channel(
                options["program"],
                wordlist_path=wordlist_path,
                hard=options["hard"],
                verbose=verbose,
                stdin=options.get("stdin", sys.stdin),
                stdout=self.stdout,
                styles=styles,
            ) as channel:
                result = Session(solution, wordlist, channel, hard_mode=options["hard"]).play()
        except GameError as exc:
            raise CommandError(str(exc)) from exc

        if result.state is SessionState.INVALID_GUESS:
            raise CommandError(f"Invalid guess: {result.guess}", returncode=1)
        if result.state is SessionState.WON:
            self.stdout.write(str(result.turns))
