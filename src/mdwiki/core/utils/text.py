"""Word counting and reading-time estimation"""

import math


WORDS_PER_MINUTE = 200


def word_count(text: str) -> int:
    return len(text.split())


def reading_time(text: str, words_per_minute: int = WORDS_PER_MINUTE) -> int:
    """Whole minutes to read text, rounded up; 0 for an empty body."""
    return math.ceil(word_count(text) / words_per_minute)
