"""
Unit tests for the roulette draw. No database involved.
"""

import pytest

from apps.meetings.services import (
    Candidate,
    WeightedCandidate,
    aggregate_candidates,
    select_winner,
    draw,
)
from .conftest import FixedRandom


def even_pair():
    return aggregate_candidates([Candidate('a', 'Alpha'), Candidate('b', 'Bravo')], {})


def weighted_pair():
    votes = {'u1': 'a', 'u2': 'a', 'u3': 'a', 'u4': 'b'}
    return aggregate_candidates([Candidate('a', 'Alpha'), Candidate('b', 'Bravo')], votes)


class TestSelectWinner:

    def test_zero_selects_first(self):
        assert select_winner(even_pair(), 0.0).restaurant_id == 'a'

    def test_just_below_one_selects_last(self):
        assert select_winner(even_pair(), 0.9999999).restaurant_id == 'b'

    def test_boundary_belongs_to_next_candidate(self):
        assert select_winner(even_pair(), 0.5).restaurant_id == 'b'

    def test_weighted_ranges(self):
        distribution = weighted_pair()

        assert select_winner(distribution, 0.74).restaurant_id == 'a'
        assert select_winner(distribution, 0.76).restaurant_id == 'b'

    def test_is_deterministic(self):
        distribution = weighted_pair()

        winners = {select_winner(distribution, 0.6180339).restaurant_id for _ in range(50)}

        assert winners == {'a'}

    def test_rounding_gap_goes_to_last_candidate(self):
        distribution = [
            WeightedCandidate('a', 'Alpha', 1, 0.3),
            WeightedCandidate('b', 'Bravo', 1, 0.3),
            WeightedCandidate('c', 'Charlie', 1, 0.3999999),
        ]

        assert select_winner(distribution, 0.99999995).restaurant_id == 'c'

    def test_rounding_gap_skips_empty_range(self):
        distribution = [
            WeightedCandidate('a', 'Alpha', 1, 0.5),
            WeightedCandidate('b', 'Bravo', 1, 0.4999999),
            WeightedCandidate('c', 'Charlie', 0, 0.0),
        ]

        assert select_winner(distribution, 0.99999999).restaurant_id == 'b'

    @pytest.mark.parametrize('r', [-0.1, 1.0, 1.5])
    def test_r_out_of_range(self, r):
        with pytest.raises(ValueError):
            select_winner(even_pair(), r)

    def test_empty_distribution(self):
        with pytest.raises(ValueError):
            select_winner([], 0.3)


class TestDraw:

    def test_uses_rng_value(self):
        result = draw(weighted_pair(), FixedRandom(0.8))

        assert result.random_value == 0.8
        assert result.winner.restaurant_id == 'b'
        assert len(result.distribution) == 2

    def test_default_rng(self):
        result = draw(even_pair())

        assert 0.0 <= result.random_value < 1.0
        assert result.winner.restaurant_id in ('a', 'b')
