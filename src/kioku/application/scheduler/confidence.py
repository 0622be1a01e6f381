from kioku.application.config import DEFAULT_SETTINGS, SchedulerSettings
from kioku.domain.review.models import ConfidenceLevel


def compute_confidence(
    review_count: int,
    times_correct: int,
    interval_days: int,
    was_correct: bool,
    settings: SchedulerSettings | None = None,
) -> ConfidenceLevel:
    """
    Classify an item from its counters after a review.

    Recomputed from scratch each time. A miss on a young item drops it to
    learning; a miss on a mature item only drops it to reviewing.
    """
    settings = settings or DEFAULT_SETTINGS

    if review_count == 0:
        return ConfidenceLevel.NEW

    if not was_correct:
        if review_count <= settings.young_item_max_reviews:
            return ConfidenceLevel.LEARNING
        return ConfidenceLevel.REVIEWING

    if interval_days > settings.known_min_interval and times_correct > 0:
        accuracy = times_correct / review_count
        if accuracy >= settings.known_min_accuracy:
            return ConfidenceLevel.KNOWN

    if times_correct >= settings.reviewing_min_correct:
        return ConfidenceLevel.REVIEWING
    return ConfidenceLevel.LEARNING
