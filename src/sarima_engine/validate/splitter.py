"""Fixed-index train/test split of the monthly series."""
from __future__ import annotations

from typing import Sequence, Tuple

from ..core.types import MonthlyMean, SeriesWindow
from ..errors import InsufficientDataError
from ..logging_utils import get_logger

log = get_logger(__name__)


def _window(means: Sequence[MonthlyMean], period: int) -> SeriesWindow:
    first = means[0]
    return SeriesWindow(
        values=tuple(m.value for m in means),
        start_year=first.year,
        start_month=first.month,
        period=period,
    )


def split_window(
    means: Sequence[MonthlyMean],
    train_size: int = 108,
    test_size: int = 12,
    period: int = 12,
) -> Tuple[SeriesWindow, SeriesWindow]:
    """Return the first ``train_size`` points and the ``test_size`` following them."""

    if train_size < 1 or test_size < 1:
        raise ValueError("train_size and test_size must be positive")
    needed = train_size + test_size
    if len(means) < needed:
        raise InsufficientDataError(
            f"need {needed} monthly points for a {train_size}/{test_size} split, got {len(means)}"
        )
    if len(means) > needed:
        log.warning("split.months_dropped", count=len(means) - needed, kept=needed)
    train = _window(means[:train_size], period)
    test = _window(means[train_size:needed], period)
    return train, test
