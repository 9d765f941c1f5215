"""
Directory distributions for the business-intelligence view.

Each distribution is a list of ``(label, count)`` pairs in first-seen order.
``top_label`` picks the highest count; ties go to the label seen first.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from fruitlink.models.entity import Buyer, Supplier

Distribution = list[tuple[str, int]]


def _count(labels: Iterable[str]) -> Distribution:
    # Counter preserves insertion order, which gives first-seen ordering.
    return list(Counter(labels).items())


def country_distribution(suppliers: Sequence[Supplier]) -> Distribution:
    """Number of suppliers per country."""
    return _count(s.country for s in suppliers)


def fruit_interest_distribution(buyers: Sequence[Buyer]) -> Distribution:
    """Number of buyers interested in each fruit."""
    return _count(f for b in buyers for f in b.fruits_interested)


def certification_distribution(suppliers: Sequence[Supplier]) -> Distribution:
    """Number of suppliers holding each certification."""
    return _count(c for s in suppliers for c in s.certifications)


def top_label(distribution: Distribution) -> Optional[str]:
    """Label with the highest count, or ``None`` for an empty distribution."""
    best: Optional[tuple[str, int]] = None
    for label, count in distribution:
        if best is None or count > best[1]:
            best = (label, count)
    return best[0] if best else None


@dataclass(frozen=True)
class DirectorySummary:
    """All three distributions plus their top labels."""

    countries: Distribution
    fruits: Distribution
    certifications: Distribution

    @property
    def top_country(self) -> Optional[str]:
        return top_label(self.countries)

    @property
    def top_fruit(self) -> Optional[str]:
        return top_label(self.fruits)

    @property
    def top_certification(self) -> Optional[str]:
        return top_label(self.certifications)


def summarize_directory(
    suppliers: Sequence[Supplier],
    buyers: Sequence[Buyer],
) -> DirectorySummary:
    """Build the distributions shown on the dashboard."""
    return DirectorySummary(
        countries=country_distribution(suppliers),
        fruits=fruit_interest_distribution(buyers),
        certifications=certification_distribution(suppliers),
    )
