"""Score, risk band and deliverability derived from the nine checks."""

from dataclasses import dataclass, field

from mailvet.config import ScoringConfig
from mailvet.core.logging import get_logger

from .models import CheckOutcome, Checks, Deliverability, RiskLevel

logger = get_logger(__name__)

DEFAULT_WEIGHTS: dict[str, int] = {
    "syntax": 20,
    "domain": 20,
    "mx": 25,
    "disposable": 15,  # awarded when NOT disposable
    "role_based": 5,  # awarded when NOT role-based
    "typo": 10,  # awarded when no typo
    "blacklist": 5,  # awarded when NOT blacklisted
}

LOW_RISK_MIN_SCORE = 80
MEDIUM_RISK_MIN_SCORE = 50


@dataclass(frozen=True)
class ScoringPolicy:
    """
    Weighted scoring of a validation.

    A passing component earns its full weight and a failing one earns nothing.
    Network checks that came back inconclusive earn ``inconclusive_credit`` of
    their weight (rounded down), so pass >= inconclusive >= fail always holds.
    A syntax failure scores 0 outright.
    """

    weights: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    inconclusive_credit: float = 0.5

    @classmethod
    def from_config(cls, config: ScoringConfig) -> "ScoringPolicy":
        weights = {**DEFAULT_WEIGHTS, **config.weights}
        if sum(weights.values()) != 100:
            logger.bind(weights=weights).warning("scoring_weights_do_not_sum_to_100")
        credit = min(max(config.inconclusive_credit, 0.0), 1.0)
        return cls(weights=weights, inconclusive_credit=credit)

    def score(self, checks: Checks) -> int:
        if not checks.syntax.valid:
            return 0

        w = self.weights
        total = w["syntax"]
        if checks.domain.valid:
            total += w["domain"]
        total += self._outcome_points(checks.mx.outcome, w["mx"])
        if not checks.disposable.is_disposable:
            total += w["disposable"]
        if not checks.role_based.is_role_based:
            total += w["role_based"]
        if not checks.typo.has_typo:
            total += w["typo"]
        total += self._outcome_points(checks.blacklisted.outcome, w["blacklist"])

        return max(0, min(100, total))

    def _outcome_points(self, outcome: CheckOutcome, weight: int) -> int:
        if outcome == CheckOutcome.PASS:
            return weight
        if outcome == CheckOutcome.INCONCLUSIVE:
            return int(weight * self.inconclusive_credit)
        return 0


def is_valid(checks: Checks) -> bool:
    """Syntax and domain pass and MX did not definitively fail."""
    return (
        checks.syntax.valid
        and checks.domain.valid
        and checks.mx.outcome != CheckOutcome.FAIL
    )


def risk_level(score: int) -> RiskLevel:
    if score >= LOW_RISK_MIN_SCORE:
        return RiskLevel.LOW
    if score >= MEDIUM_RISK_MIN_SCORE:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def deliverability(checks: Checks) -> Deliverability:
    if (
        not checks.syntax.valid
        or not checks.domain.valid
        or checks.mx.outcome == CheckOutcome.FAIL
    ):
        return Deliverability.UNDELIVERABLE
    if checks.mx.outcome == CheckOutcome.INCONCLUSIVE:
        return Deliverability.UNKNOWN
    if (
        checks.disposable.is_disposable
        or checks.blacklisted.is_blacklisted
        or checks.catch_all.is_catch_all
    ):
        return Deliverability.RISKY
    return Deliverability.DELIVERABLE
