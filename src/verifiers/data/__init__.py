"""Word lists used by dictionary-mode validation."""

from .dictionary import check as check_word, checker, load_word_list, MIN_ZIPF_FREQUENCY

__all__ = ["check_word", "checker", "load_word_list", "MIN_ZIPF_FREQUENCY"]
