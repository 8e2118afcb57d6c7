"""Merges document-provided and knowledge-base reference bounds."""

from biomarker_engine.interpretation.models import (
    Gender,
    MarkerDescriptor,
    MetricPoint,
    ReferenceRange,
)

# Stand-in for a missing bound so that only the other side constrains a value.
UNBOUNDED_SENTINEL = 999_999.0


def resolve_range(
    dynamic: ReferenceRange | None,
    descriptor: MarkerDescriptor,
    gender: Gender,
) -> ReferenceRange:
    """Resolve the effective range, bound by bound.

    Priority per bound: dynamic (document) bound, then the descriptor's
    gender-specific bound, then its general bound.
    """
    specific = descriptor.ranges.male if gender is Gender.MALE else descriptor.ranges.female
    general = descriptor.ranges.general
    return ReferenceRange(
        min=_first_bound(
            dynamic.min if dynamic else None,
            specific.min if specific else None,
            general.min if general else None,
        ),
        max=_first_bound(
            dynamic.max if dynamic else None,
            specific.max if specific else None,
            general.max if general else None,
        ),
    )


def classification_bounds(effective: ReferenceRange) -> tuple[float, float] | None:
    """Return finite ``(min, max)`` for classification, or None if both are missing."""
    if effective.is_empty:
        return None
    low = effective.min if effective.min is not None else -UNBOUNDED_SENTINEL
    high = effective.max if effective.max is not None else UNBOUNDED_SENTINEL
    return low, high


def dynamic_range_of(point: MetricPoint) -> ReferenceRange | None:
    """Reference bounds printed on the document a point was extracted from."""
    if point.ref_min is None and point.ref_max is None:
        return None
    return ReferenceRange(min=point.ref_min, max=point.ref_max)


def _first_bound(*candidates: float | None) -> float | None:
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return None
