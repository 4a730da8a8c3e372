from dataclasses import dataclass, replace
from functools import reduce
import math
from typing import Callable, Optional, Sequence, Tuple

from healthapproved.schemas.additive import AdditiveLevel, AdditiveRecord
from healthapproved.schemas.product import Product
from . import mappings as m
from .schemas import Highlight, ScoreResult, ScoreStatus
from .tokens import extract_tokens, normalize_token


@dataclass(frozen=True)
class ScoreState:
    """Running state threaded through the scoring rules."""
    score: int = m.START_SCORE
    status: ScoreStatus = ScoreStatus.APPROVED
    reasons: Tuple[str, ...] = ()
    highlights: Tuple[Highlight, ...] = ()

    def adjust(self, delta: int, reason: Optional[str] = None) -> "ScoreState":
        reasons = self.reasons + (reason,) if reason else self.reasons
        return replace(self, score=self.score + delta, reasons=reasons)

    def with_status(self, status: ScoreStatus) -> "ScoreState":
        return replace(self, status=status)

    def highlight(self, name: str, level: str, note: str) -> "ScoreState":
        return replace(self, highlights=self.highlights + (Highlight(name=name, level=level, note=note),))


@dataclass(frozen=True)
class ScoringContext:
    product: Product
    tokens: Tuple[str, ...]
    additives: Tuple[AdditiveRecord, ...]


Rule = Callable[[ScoreState, ScoringContext], ScoreState]


def _slope_penalty(excess: float, cap: int) -> int:
    # An unbounded amount takes the whole slope
    if not math.isfinite(excess):
        return cap
    return min(cap, math.floor(excess))


def _severity_penalty(severity: Optional[float], default: int) -> int:
    # 0 counts as not provided
    return math.floor(severity) if severity else default


def category_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    category = (ctx.product.category or "").lower()
    if any(c in category for c in m.ULTRA_PROCESSED_CATEGORIES):
        return state.adjust(-m.ULTRA_PROCESSED_PENALTY, m.REASON_ULTRA_PROCESSED)
    return state


def sugar_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    sugar = ctx.product.nutrition.sugar
    if sugar is None:
        return state
    if sugar > m.SUGAR_THRESHOLD:
        state = state.adjust(-_slope_penalty(sugar - m.SUGAR_THRESHOLD, m.SUGAR_SLOPE_CAP))
    if sugar > m.HIGH_SUGAR_THRESHOLD:
        state = state.adjust(-m.HIGH_SUGAR_PENALTY, m.REASON_HIGH_SUGAR)
    return state


def sodium_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    sodium = ctx.product.nutrition.sodium
    if sodium is None:
        return state
    if sodium > m.SODIUM_THRESHOLD:
        steps = (sodium - m.SODIUM_THRESHOLD) / m.SODIUM_STEP_MG
        state = state.adjust(-_slope_penalty(steps, m.SODIUM_SLOPE_CAP))
    if sodium > m.HIGH_SODIUM_THRESHOLD:
        state = state.adjust(-m.HIGH_SODIUM_PENALTY, m.REASON_HIGH_SODIUM)
    return state


def trans_fat_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    trans_fat = ctx.product.nutrition.trans_fat
    if trans_fat is not None and trans_fat > 0:
        state = state.adjust(-m.TRANS_FAT_PENALTY, m.REASON_TRANS_FAT)
        return state.with_status(ScoreStatus.NOT_APPROVED)
    return state


def sat_fat_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    sat_fat = ctx.product.nutrition.sat_fat
    if sat_fat is not None and sat_fat > m.SAT_FAT_THRESHOLD:
        return state.adjust(-m.SAT_FAT_PENALTY)
    return state


def _additive_names(additive: AdditiveRecord) -> set:
    return {normalize_token(n) for n in [additive.name, *additive.aliases]}


def _apply_additive(state: ScoreState, additive: AdditiveRecord) -> ScoreState:
    if additive.level == AdditiveLevel.RED.value:
        state = state.adjust(
            -_severity_penalty(additive.severity, m.RED_DEFAULT_SEVERITY),
            additive.short or additive.name,
        )
        if state.status == ScoreStatus.APPROVED and state.score >= m.NOT_APPROVED_BELOW:
            state = state.with_status(ScoreStatus.CAUTION)
        if state.score < m.NOT_APPROVED_BELOW:
            state = state.with_status(ScoreStatus.NOT_APPROVED)
        return state.highlight(additive.name, AdditiveLevel.RED.value, additive.short or m.RED_DEFAULT_NOTE)

    if additive.level == AdditiveLevel.AMBER.value:
        penalty = min(m.AMBER_MAX_PENALTY, _severity_penalty(additive.severity, m.AMBER_DEFAULT_SEVERITY))
        state = state.adjust(-penalty)
        return state.highlight(additive.name, AdditiveLevel.AMBER.value, additive.short or m.AMBER_DEFAULT_NOTE)

    return state.highlight(additive.name, AdditiveLevel.GREEN.value, m.GREEN_NOTE)


def additives_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    token_set = set(ctx.tokens)
    matched = [a for a in ctx.additives if not _additive_names(a).isdisjoint(token_set)]
    return reduce(_apply_additive, matched, state)


def palm_oil_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    if any(marker in t for t in ctx.tokens for marker in m.PALM_OIL_MARKERS):
        return state.adjust(-m.PALM_OIL_PENALTY, m.REASON_PALM_OIL)
    return state


def positives_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    if any(p in t for t in ctx.tokens for p in m.POSITIVE_INGREDIENTS):
        return state.adjust(m.POSITIVE_BONUS)
    return state


def clamp_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    return replace(state, score=max(m.MIN_SCORE, min(m.MAX_SCORE, state.score)))


def finalize_status_rule(state: ScoreState, ctx: ScoringContext) -> ScoreState:
    if state.status == ScoreStatus.APPROVED and state.score < m.APPROVED_MIN_SCORE:
        state = state.with_status(ScoreStatus.CAUTION)
    if state.score < m.NOT_APPROVED_BELOW:
        state = state.with_status(ScoreStatus.NOT_APPROVED)
    return state


# Order matters: later rules can override status set by earlier ones
RULES: Tuple[Rule, ...] = (
    category_rule,
    sugar_rule,
    sodium_rule,
    trans_fat_rule,
    sat_fat_rule,
    additives_rule,
    palm_oil_rule,
    positives_rule,
    clamp_rule,
    finalize_status_rule,
)


def compute_health_score(product: Product, additives: Sequence[AdditiveRecord]) -> ScoreResult:
    """Score a packaged-food product against the additive knowledge base.

    Pure and deterministic: the same product and KB always give the same
    result. The score starts at 100, each rule in RULES adjusts it in order,
    and the result is clamped to [0, 100] before the status is finalized.
    """
    ctx = ScoringContext(
        product=product,
        tokens=tuple(extract_tokens(product.ingredients_raw)),
        additives=tuple(additives),
    )
    state = reduce(lambda s, rule: rule(s, ctx), RULES, ScoreState())
    return ScoreResult(
        score=state.score,
        status=state.status,
        reasons=list(state.reasons),
        highlights=list(state.highlights),
    )
