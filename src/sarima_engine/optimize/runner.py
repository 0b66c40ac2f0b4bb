"""Exhaustive grid search over seasonal ARIMA orders."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

import pandas as pd

from ..core.spec import SearchSpec
from ..core.types import FitFailure, FitOutcome, FitResult, ModelSpec
from ..errors import NoCandidateError
from ..logging_utils import get_logger
from ..models.sarima import fit_candidate

log = get_logger(__name__)

FitFn = Callable[..., FitOutcome]

COMPARISON_COLUMNS = ["p", "d", "q", "P", "D", "Q", "s", "label", "aic", "sse", "lb_pvalue"]


def iterate_search_space(search: SearchSpec) -> Iterator[ModelSpec]:
    """Yield candidate specs, nested p -> q -> P -> Q, with d, D, s fixed."""

    for p in search.p:
        for q in search.q:
            for P in search.P:
                for Q in search.Q:
                    yield ModelSpec(p=p, d=search.d, q=q, P=P, D=search.D, Q=Q, s=search.s)


@dataclass(frozen=True)
class GridResult:
    results: Tuple[FitResult, ...]
    failures: Tuple[FitFailure, ...]

    @property
    def attempted(self) -> int:
        return len(self.results) + len(self.failures)

    def comparison_table(self) -> pd.DataFrame:
        """One row per successful fit, in attempt order."""

        rows = [
            {
                **r.spec.to_dict(),
                "label": r.spec.label,
                "aic": r.aic,
                "sse": r.sse,
                "lb_pvalue": r.ljung_box_p_value,
            }
            for r in self.results
        ]
        return pd.DataFrame(rows, columns=COMPARISON_COLUMNS)


def run_grid(
    values: Sequence[float],
    search: SearchSpec,
    fit: Optional[FitFn] = None,
) -> GridResult:
    """Fit every candidate of ``search`` to ``values``.

    A candidate that fails to estimate is recorded in ``failures`` and the
    search moves on; nothing raised by one candidate aborts the grid.
    """

    fit = fit or fit_candidate
    results: List[FitResult] = []
    failures: List[FitFailure] = []
    for spec in iterate_search_space(search):
        outcome = fit(
            values,
            spec,
            ljung_box_lag=search.ljung_box_lag,
            maxiter=search.maxiter,
            strict_convergence=search.strict_convergence,
        )
        if isinstance(outcome, FitFailure):
            log.warning("grid.candidate_failed", label=spec.label, reason=outcome.reason)
            failures.append(outcome)
            continue
        log.info(
            "grid.candidate_fitted",
            label=spec.label,
            aic=round(outcome.aic, 3),
            sse=round(outcome.sse, 3),
            lb_pvalue=round(outcome.ljung_box_p_value, 4),
        )
        results.append(outcome)
    log.info("grid.completed", fitted=len(results), failed=len(failures))
    return GridResult(results=tuple(results), failures=tuple(failures))


def _selection_key(indexed: Tuple[int, FitResult]) -> Tuple[float, float, float, int]:
    idx, r = indexed
    return (r.aic, r.sse, -r.ljung_box_p_value, idx)


def rank_results(results: Sequence[FitResult]) -> List[FitResult]:
    """Sort by AIC, then SSE, then descending Ljung-Box p-value, then attempt order."""

    return [r for _, r in sorted(enumerate(results), key=_selection_key)]


def select_best(results: Sequence[FitResult]) -> FitResult:
    """Return the candidate with the lowest AIC, using :func:`rank_results` tie-breaks."""

    if not results:
        raise NoCandidateError("no candidate model could be estimated")
    best = rank_results(results)[0]
    log.info("grid.selected", label=best.spec.label, aic=round(best.aic, 3))
    return best
