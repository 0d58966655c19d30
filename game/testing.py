"""
Test support: wordlist files and executable player scripts on disk.

Only game/tests_*.py import this module; the game itself never does.
"""

import os
import stat
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

SAMPLE_PLAYER_SOURCE = f"""\
import sys
sys.path.insert(0, {str(PROJECT_ROOT)!r})
from game.sample_player import main
sys.exit(main())
"""


def write_wordlist(directory, words, name="words.txt"):
    path = os.path.join(directory, name)
    with open(path, "w", encoding="ascii") as fh:
        fh.write("".join(word + "\n" for word in words))
    return path


def write_player(directory, source, name="player"):
    """Write an executable Python script that runs with the current interpreter."""
    path = os.path.join(directory, name)
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(f"#!{sys.executable}\n")
        fh.write(source)
    os.chmod(path, os.stat(path).st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def write_sample_player(directory, name="sample-player"):
    return write_player(directory, SAMPLE_PLAYER_SOURCE, name=name)
