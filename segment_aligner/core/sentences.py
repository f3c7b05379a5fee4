"""Sentence splitting for writing practice and shadowing sessions.

WHY: Two practice modes start from raw prose rather than timed captions.
Writing practice translates one sentence at a time and wants each prompt to
be substantial but not overwhelming (10-25 words). Shadowing over a story
just needs the sentences, one per drill.

HOW: split_into_sentences() splits on sentence punctuation, then buffers
short sentences together and breaks long ones at commas or discourse
conjunctions. split_story_sentences() is the plain punctuation split.

RULES:
- Text is never rewritten; only whitespace between sentences is dropped.
- A trailing fragment below min_words is merged into the previous sentence
  when that stays within max_words, otherwise it is kept on its own.
- Long-sentence splitting may leave a part slightly above max_words when a
  short remainder is folded back into it.
"""

from __future__ import annotations

import re
from typing import List, Optional

PRACTICE_MIN_WORDS = 10
PRACTICE_MAX_WORDS = 25

PRACTICE_SENTENCE_RE = re.compile(r"(?<=[.!?¡¿…])\s+")
STORY_SENTENCE_RE = re.compile(r"(?<=[.!?])\s+")
CLAUSE_END_RE = re.compile(r"[,;:]$")

CONJUNCTIONS = frozenset({
    "and", "but", "or", "so", "yet", "because", "although", "while", "when",
    "if", "then", "however", "therefore", "moreover", "furthermore",
    "additionally", "consequently", "thus", "hence", "meanwhile", "otherwise",
    "instead", "rather", "indeed",
})


def count_words(text: Optional[str]) -> int:
    """Whitespace token count; 0 for None or blank text."""
    if not text or not text.strip():
        return 0
    return len(text.split())


def _join(left: str, right: str) -> str:
    return "{} {}".format(left, right) if left else right


def split_into_sentences(
    text: Optional[str],
    min_words: int = PRACTICE_MIN_WORDS,
    max_words: int = PRACTICE_MAX_WORDS,
) -> List[str]:
    """Split prose into practice sentences of roughly min..max words.

    Args:
        text: Source prose.
        min_words: Sentences shorter than this are combined with the next.
        max_words: Sentences longer than this are split at natural breaks.

    Returns:
        Practice sentences in order; empty list for blank text.
    """
    if not text or not text.strip():
        return []

    raw_sentences = [s.strip() for s in PRACTICE_SENTENCE_RE.split(text)]
    raw_sentences = [s for s in raw_sentences if s]

    result = []  # type: List[str]
    buffer = ""

    for sentence in raw_sentences:
        combined = _join(buffer, sentence)
        word_count = count_words(combined)

        if word_count <= max_words:
            if word_count >= min_words:
                result.append(combined)
                buffer = ""
            else:
                buffer = combined
            continue

        if buffer and count_words(buffer) >= min_words:
            result.append(buffer)
            buffer = ""

        current = _join(buffer, sentence)
        if count_words(current) > max_words:
            result.extend(split_long_sentence(current, min_words, max_words))
            buffer = ""
        else:
            buffer = current

    if buffer:
        if result and count_words(buffer) < min_words:
            if count_words(result[-1]) + count_words(buffer) <= max_words:
                result[-1] = _join(result[-1], buffer)
            else:
                result.append(buffer)
        else:
            result.append(buffer)

    return result


def _is_natural_break(word: str, next_word: str) -> bool:
    return bool(CLAUSE_END_RE.search(word)) or next_word.lower() in CONJUNCTIONS


def split_long_sentence(text: str, min_words: int, max_words: int) -> List[str]:
    """Break an over-long sentence at clause punctuation or conjunctions.

    A part is closed once it has min_words and either reaches max_words or
    sits at a natural break (its last word ends with , ; : or the next word
    is a conjunction such as "and" or "however").
    """
    words = text.split()
    if len(words) <= max_words:
        return [text]

    result = []  # type: List[str]
    current = []  # type: List[str]

    for i, word in enumerate(words):
        current.append(word)
        next_word = words[i + 1] if i + 1 < len(words) else ""
        if len(current) >= min_words and (
            len(current) >= max_words or _is_natural_break(word, next_word)
        ):
            result.append(" ".join(current))
            current = []

    if current:
        if result and len(current) < min_words:
            result[-1] = _join(result[-1], " ".join(current))
        else:
            result.append(" ".join(current))

    return result


def split_story_sentences(text: Optional[str]) -> List[str]:
    """Split story prose into sentences for a shadowing session."""
    if not text:
        return []
    return [s.strip() for s in STORY_SENTENCE_RE.split(text) if s.strip()]
