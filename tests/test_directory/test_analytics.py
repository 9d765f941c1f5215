"""Tests for fruitlink.directory.analytics."""

from __future__ import annotations

from fruitlink.directory.analytics import (
    certification_distribution,
    country_distribution,
    fruit_interest_distribution,
    summarize_directory,
    top_label,
)


class TestDistributions:
    def test_countries_first_seen_order(self, suppliers):
        assert country_distribution(suppliers) == [
            ("Indonesia", 1), ("Colombia", 2), ("Vietnam", 1),
        ]

    def test_fruit_interest(self, buyers):
        assert fruit_interest_distribution(buyers) == [
            ("banana", 2), ("mango", 1), ("limes", 1), ("raspberry", 1),
        ]

    def test_certifications(self, suppliers):
        dist = dict(certification_distribution(suppliers))
        assert dist["GLOBALG.A.P"] == 4
        assert dist["Organic"] == 2
        assert certification_distribution(suppliers)[0] == ("GLOBALG.A.P", 4)

    def test_empty_inputs(self):
        assert country_distribution([]) == []


class TestTopLabel:
    def test_highest_count_wins(self):
        assert top_label([("a", 1), ("b", 3), ("c", 2)]) == "b"

    def test_ties_go_to_first_seen(self):
        assert top_label([("a", 2), ("b", 2)]) == "a"

    def test_empty(self):
        assert top_label([]) is None


def test_summarize_seed_directory(suppliers, buyers):
    summary = summarize_directory(suppliers, buyers)
    assert summary.top_country == "Colombia"
    assert summary.top_fruit == "banana"
    assert summary.top_certification == "GLOBALG.A.P"
