"""Channel checks and the classification engine behind them."""

from channel_screen.filters.checks import (
    description_not_empty_check,
    flagged_chars_check,
    hard_phrases_check,
    taxonomy_check,
    topic_check,
    word_list_check,
)
from channel_screen.filters.engine import ScanStrategy, classify, strategy_for
from channel_screen.filters.prefilter import PrefilterOptions, run_prefilter

__all__ = [
    "classify",
    "ScanStrategy",
    "strategy_for",
    "hard_phrases_check",
    "taxonomy_check",
    "flagged_chars_check",
    "word_list_check",
    "topic_check",
    "description_not_empty_check",
    "run_prefilter",
    "PrefilterOptions",
]
