"""Localized feedback phrases.

Each locale supplies the two sentinel labels, the sentence templates and
one phrase per suggestion key. Suggestion keys are emitted by the scoring
engine in a fixed order: coverage, span, offset, edge, track.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

SUGGESTION_KEYS = ('coverage', 'span', 'offset', 'edge', 'track')


@dataclass(frozen=True)
class FeedbackPhrases:
    """Phrase table for one locale.

    Attributes:
        no_ink_label: identified_character when nothing was drawn.
        unclear_label: identified_character when the score does not pass.
        no_ink_prompt: Feedback when nothing was drawn; ``{character}``
            is replaced by the target.
        praise: Feedback when there is nothing to improve.
        advice: Feedback wrapping the joined suggestions (``{suggestions}``).
        suggestions: Phrase per suggestion key.
        pair_joiner: Joins exactly two suggestions.
        list_separator: Separates all but the last of three or more.
        last_joiner: Precedes the last of three or more.
    """
    no_ink_label: str
    unclear_label: str
    no_ink_prompt: str
    praise: str
    advice: str
    suggestions: Dict[str, str] = field(default_factory=dict)
    pair_joiner: str = ' and '
    list_separator: str = ', '
    last_joiner: str = ', and '

    def join(self, items: Sequence[str]) -> str:
        """Join suggestion phrases into one clause."""
        if not items:
            return ''
        if len(items) == 1:
            return items[0]
        if len(items) == 2:
            return f"{items[0]}{self.pair_joiner}{items[1]}"
        return f"{self.list_separator.join(items[:-1])}{self.last_joiner}{items[-1]}"

    def phrases_for(self, keys: Sequence[str]) -> List[str]:
        return [self.suggestions[k] for k in keys]


PHRASES: Dict[str, FeedbackPhrases] = {
    'zh-Hant': FeedbackPhrases(
        no_ink_label='未書寫',
        unclear_label='不明',
        no_ink_prompt='看起來還沒有落筆，試著先描寫「{character}」的筆畫。',
        praise='太棒了！你的「{character}」筆畫穩定又清楚。',
        advice='試著{suggestions}，你的「{character}」會更好看。',
        suggestions={
            'coverage': '多寫幾筆讓字形更清楚',
            'span': '把筆畫稍微拉開填滿米字格',
            'offset': '讓整個字更居中',
            'edge': '注意不要碰到外框',
            'track': '維持筆畫在描紅軌跡內',
        },
        pair_joiner='並且',
        list_separator='、',
        last_joiner='，並且',
    ),
    'en': FeedbackPhrases(
        no_ink_label='(not written)',
        unclear_label='(unclear)',
        no_ink_prompt='Nothing has been written yet. Start by tracing the strokes of "{character}".',
        praise='Great job! Your "{character}" is steady and clear.',
        advice='Try to {suggestions} so your "{character}" looks even better.',
        suggestions={
            'coverage': 'add more strokes so the shape is clearer',
            'span': 'spread the strokes out to fill the guide grid',
            'offset': 'center the whole character',
            'edge': 'keep the strokes away from the border',
            'track': 'stay within the guide track',
        },
    ),
}


def get_phrases(locale: str) -> FeedbackPhrases:
    """Look up the phrase table for ``locale``.

    Raises:
        ValueError: If the locale has no phrase table.
    """
    try:
        return PHRASES[locale]
    except KeyError:
        raise ValueError(
            f"Unsupported locale {locale!r}; expected one of {sorted(PHRASES)}"
        ) from None
