"""
Keyword-based sentiment classifier and period sentiment summary.

Conversations on the monitored WhatsApp instances are in Portuguese, so the
keyword lists are Portuguese domain terms. Classification is a deterministic
count of keyword hits; no NLP model or external service is involved.

Classification rules:
    score = positive_hits / (positive_hits + negative_hits)
    score > 0.6  -> positive
    score < 0.4  -> negative
    otherwise    -> neutral
    no hits      -> neutral with score 0.5

The keyword lists include multi-word phrases ("não gostei"). Tokens are
produced by whitespace splitting, so those phrases never match a single
token; they are kept so results stay identical to the dashboard's classifier.
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from engagement_backend.models.enums import IntentCategory, SentimentLabel
from engagement_backend.models.schemas import (
    HistoricalDataPoint,
    IntentPrediction,
    SentimentAnalysis,
    SentimentResult,
)
from engagement_backend.services.statistics import mean


# =============================================================================
# Keyword Lists
# =============================================================================

POSITIVE_WORDS: Tuple[str, ...] = (
    'bom',
    'ótimo',
    'excelente',
    'satisfeito',
    'gostei',
    'recomendo',
    'funciona',
    'rápido',
    'eficiente',
    'atendeu',
    'resolvido',
    'sucesso',
    'positivo',
)

NEGATIVE_WORDS: Tuple[str, ...] = (
    'ruim',
    'péssimo',
    'insatisfeito',
    'não gostei',
    'problema',
    'lento',
    'ineficiente',
    'não atendeu',
    'não resolvido',
    'fracasso',
    'negativo',
    'reclamação',
)

POSITIVE_THRESHOLD: float = 0.6
NEGATIVE_THRESHOLD: float = 0.4
NEUTRAL_SCORE: float = 0.5

# Returned when there is no data to summarise
DEFAULT_SENTIMENT_SCORE: float = 0.75
DEFAULT_INTENT_MIX: Dict[str, float] = {
    IntentCategory.PURCHASE.value: 0.35,
    IntentCategory.SUPPORT.value: 0.25,
    IntentCategory.COMPLAINT.value: 0.15,
    IntentCategory.INQUIRY.value: 0.25,
}


# =============================================================================
# Classification
# =============================================================================


def classify_score(
    score: float,
    positive_threshold: float = POSITIVE_THRESHOLD,
    negative_threshold: float = NEGATIVE_THRESHOLD,
) -> SentimentLabel:
    """
    Map a 0-1 score to a sentiment label using strict thresholds.
    """
    if score > positive_threshold:
        return SentimentLabel.POSITIVE
    if score < negative_threshold:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


def analyze_sentiment(
    text: str,
    positive_words: Optional[Iterable[str]] = None,
    negative_words: Optional[Iterable[str]] = None,
    positive_threshold: float = POSITIVE_THRESHOLD,
    negative_threshold: float = NEGATIVE_THRESHOLD,
) -> SentimentResult:
    """
    Classify free text by counting positive and negative keyword hits.

    Args:
        text: Message text. Case-insensitive, split on whitespace.
        positive_words: Override for the positive keyword list.
        negative_words: Override for the negative keyword list.
        positive_threshold: Scores strictly above this are positive.
        negative_threshold: Scores strictly below this are negative.

    Returns:
        SentimentResult with the label and the positive-hit ratio.

    Example:
        >>> analyze_sentiment("atendimento excelente e rápido").sentiment
        <SentimentLabel.POSITIVE: 'positive'>
        >>> analyze_sentiment("olá tudo certo").score
        0.5
    """
    positive: FrozenSet[str] = frozenset(
        POSITIVE_WORDS if positive_words is None else positive_words
    )
    negative: FrozenSet[str] = frozenset(
        NEGATIVE_WORDS if negative_words is None else negative_words
    )

    positive_count = 0
    negative_count = 0

    for word in text.lower().split():
        if word in positive:
            positive_count += 1
        if word in negative:
            negative_count += 1

    total = positive_count + negative_count
    if total == 0:
        return SentimentResult(sentiment=SentimentLabel.NEUTRAL, score=NEUTRAL_SCORE)

    score = positive_count / total
    return SentimentResult(
        sentiment=classify_score(score, positive_threshold, negative_threshold),
        score=score,
    )


# =============================================================================
# Period Summary
# =============================================================================


def summarize_sentiment(series: List[HistoricalDataPoint]) -> SentimentAnalysis:
    """
    Summarise sentiment and intent mix over a historical series.

    The overall score is the mean daily sentiment, labelled with the same
    thresholds as the keyword classifier. The intent mix is the mean daily
    proportion per category, normalised to sum to 1 (daily proportions are
    not required to). Categories missing from a day count as 0 for that day.

    An empty series yields the fixed default summary (positive, 0.75 and the
    default intent mix) so a new user still gets a renderable aggregate.
    """
    if not series:
        return SentimentAnalysis(
            overallSentiment=SentimentLabel.POSITIVE,
            sentimentScore=DEFAULT_SENTIMENT_SCORE,
            intentPrediction=IntentPrediction(**DEFAULT_INTENT_MIX),
        )

    score = mean([point.sentiment for point in series])

    averages: Dict[str, float] = {}
    for category in IntentCategory:
        averages[category.value] = mean(
            [point.intents.get(category.value, 0.0) for point in series]
        )

    total = sum(averages.values())
    if total > 0:
        mix = {key: value / total for key, value in averages.items()}
    else:
        mix = dict(DEFAULT_INTENT_MIX)

    return SentimentAnalysis(
        overallSentiment=classify_score(score),
        sentimentScore=min(1.0, max(0.0, score)),
        intentPrediction=IntentPrediction(**mix),
    )
