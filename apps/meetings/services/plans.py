"""
Meeting plans.

A meeting is created either with one chosen restaurant or with a ballot
of candidates for the roulette.
"""

from dataclasses import dataclass
from typing import Tuple, Union
from uuid import UUID


@dataclass(frozen=True)
class FixedPlan:
    restaurant_id: UUID


@dataclass(frozen=True)
class RoulettePlan:
    candidate_ids: Tuple[UUID, ...]


MeetingPlan = Union[FixedPlan, RoulettePlan]
