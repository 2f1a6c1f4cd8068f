# This util contains the default spell checker for dictionary mode.
# Lookups go through wordfreq's English frequency list; a word counts as
# real when its Zipf frequency reaches the configured threshold.

from functools import partial
from pathlib import Path
from typing import Callable

from wordfreq import zipf_frequency

MIN_ZIPF_FREQUENCY = 2.0


def check(word, min_zipf=MIN_ZIPF_FREQUENCY):
    '''
    Returns True if `word` is an English word at least as common as `min_zipf`.
    Returns False otherwise.
    '''
    if not word or not word.isalpha():
        return False
    return zipf_frequency(word.lower(), 'en') >= min_zipf


def checker(min_zipf=MIN_ZIPF_FREQUENCY) -> Callable[[str], bool]:
    '''Returns a one-argument checker bound to `min_zipf`.'''
    return partial(check, min_zipf=min_zipf)


def load_word_list(path) -> Callable[[str], bool]:
    '''
    Builds a checker from a plain word list, one word per line.
    Blank lines and lines starting with '#' are skipped.
    '''
    words = set()
    for line in Path(path).read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if line and not line.startswith('#'):
            words.add(line.lower())
    return lambda word: bool(word) and word.lower() in words
