from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from reveal_core.identity import phrase_group_id_for
from reveal_core.models import PhraseSpan, Token
from reveal_core.normalize import normalize_phrase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlurTargets:
    single_words: frozenset[str]
    phrases: tuple[tuple[str, ...], ...]

    @classmethod
    def from_config(cls, targets: list[str]) -> BlurTargets:
        singles: set[str] = set()
        phrases: list[tuple[str, ...]] = []
        for target in targets:
            words = normalize_phrase(target)
            if not words:
                logger.warning("Ignoring blur target with no matchable text: %r", target)
                continue
            if len(words) == 1:
                singles.add(words[0])
            elif tuple(words) not in phrases:
                phrases.append(tuple(words))
        return cls(single_words=frozenset(singles), phrases=tuple(phrases))


def find_phrase_spans(tokens: list[Token], phrases: tuple[tuple[str, ...], ...]) -> list[PhraseSpan]:
    """
    Every occurrence of every phrase, in target order.

    Phrases only match within a block: structural markers split the search.
    Tokens that normalize to nothing (a lone dash) are skipped over.
    """
    runs = _word_runs(tokens)
    spans: list[PhraseSpan] = []
    for words in phrases:
        group_id = phrase_group_id_for(list(words))
        size = len(words)
        for run in runs:
            for i in range(len(run) - size + 1):
                if all(run[i + j][1] == words[j] for j in range(size)):
                    spans.append(
                        PhraseSpan(
                            group_id=group_id,
                            phrase=" ".join(words),
                            start=run[i][0],
                            end=run[i + size - 1][0],
                        )
                    )
    return spans


def apply_blur_targets(tokens: list[Token], targets: BlurTargets) -> tuple[list[Token], list[PhraseSpan]]:
    """
    Mark blurred tokens and assign phrase group ids.

    A token covered by a phrase span takes that span's group id before any
    single-word rule is tried; the earliest listed phrase wins on overlap.
    Returns the annotated tokens and the spans that claimed at least one token.
    """
    spans = find_phrase_spans(tokens, targets.phrases)

    claimed: dict[int, PhraseSpan] = {}
    for span in spans:
        for index in range(span.start, span.end + 1):
            if tokens[index].is_word and tokens[index].normalized:
                claimed.setdefault(index, span)

    annotated: list[Token] = []
    for index, token in enumerate(tokens):
        if not token.is_word:
            annotated.append(token)
            continue
        span = claimed.get(index)
        if span is not None:
            annotated.append(replace(token, is_blurred=True, phrase_group_id=span.group_id))
        elif token.normalized in targets.single_words:
            annotated.append(replace(token, is_blurred=True))
        else:
            annotated.append(token)

    used = set(claimed.values())
    return annotated, [span for span in spans if span in used]


def unmatched_targets(tokens: list[Token], targets: BlurTargets) -> list[str]:
    """Targets that blur nothing in the article."""
    blurred_words = {t.normalized for t in tokens if t.is_blurred}
    group_ids = {t.phrase_group_id for t in tokens if t.phrase_group_id}
    missing = [w for w in sorted(targets.single_words) if w not in blurred_words]
    missing.extend(" ".join(p) for p in targets.phrases if phrase_group_id_for(list(p)) not in group_ids)
    return missing


def _word_runs(tokens: list[Token]) -> list[list[tuple[int, str]]]:
    runs: list[list[tuple[int, str]]] = [[]]
    for index, token in enumerate(tokens):
        if not token.is_word:
            if runs[-1]:
                runs.append([])
            continue
        normalized = token.normalized
        if normalized:
            runs[-1].append((index, normalized))
    return [run for run in runs if run]
