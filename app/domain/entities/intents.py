from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class SupportOutcome:
    name: str
    problem: str
    description: str
    status: str


@dataclass(frozen=True)
class PlanInquiry:
    name: str
    situation: str
    current_plan: str
    desired_plan: str
    phone: str
    notes: str


@dataclass(frozen=True)
class FeedbackEntry:
    name: str
    service_type: str
    rating: str
    comment: str


SideEffectIntent = Union[SupportOutcome, PlanInquiry, FeedbackEntry]
