"""Subscription plans and export-credit accounting."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional

from ..errors import ExportLimitError, FixLimitError, UnknownPlanError

# Sentinel credit count meaning "never runs out".
UNLIMITED = 999
FREE_PLAN_NAME = "Free"


@dataclass(frozen=True)
class Plan:
    tier: str
    name: str
    price: float
    exports: int
    fixes: int

    @property
    def is_unlimited(self) -> bool:
        return self.exports >= UNLIMITED

    def to_dict(self) -> dict:
        return {
            "tier": self.tier,
            "name": self.name,
            "price": self.price,
            "exports": self.exports,
            "fixes": self.fixes,
            "is_unlimited": self.is_unlimited,
        }


PLANS: Dict[str, Plan] = {
    "basic": Plan(tier="basic", name="Basic", price=2.00, exports=2, fixes=1),
    "premium": Plan(tier="premium", name="Premium", price=3.00, exports=6, fixes=3),
    "unlimited": Plan(tier="unlimited", name="Unlimited", price=4.99, exports=UNLIMITED, fixes=UNLIMITED),
}


@dataclass(frozen=True)
class Subscription:
    tier: str
    remaining_exports: int
    fixes_used: int = 0

    @classmethod
    def start(cls, tier: str) -> "Subscription":
        plan = resolve_plan(tier)
        return cls(tier=plan.tier, remaining_exports=plan.exports, fixes_used=0)


@dataclass(frozen=True)
class ExportAllowance:
    plan_name: str
    total: int
    used: int
    remaining: int
    is_unlimited: bool

    @classmethod
    def from_subscription(cls, subscription: Optional[Subscription]) -> "ExportAllowance":
        if subscription is None:
            return cls(plan_name=FREE_PLAN_NAME, total=0, used=0, remaining=0, is_unlimited=False)
        plan = resolve_plan(subscription.tier)
        if plan.is_unlimited:
            return cls(plan_name=plan.name, total=UNLIMITED, used=0, remaining=UNLIMITED, is_unlimited=True)
        remaining = max(0, subscription.remaining_exports)
        return cls(
            plan_name=plan.name,
            total=plan.exports,
            used=max(0, plan.exports - remaining),
            remaining=remaining,
            is_unlimited=False,
        )

    def to_dict(self) -> dict:
        return {
            "plan_name": self.plan_name,
            "total": self.total,
            "used": self.used,
            "remaining": self.remaining,
            "is_unlimited": self.is_unlimited,
        }


def resolve_plan(tier: str) -> Plan:
    plan = PLANS.get((tier or "").strip().lower())
    if plan is None:
        raise UnknownPlanError(f"Unknown plan tier: {tier}", details={"available": sorted(PLANS)})
    return plan


def consume_export(subscription: Optional[Subscription]) -> Subscription:
    """Spend one export credit and return the updated subscription.

    Unlimited plans never decrement.  Raises :class:`ExportLimitError` when
    there is no subscription or no credit left.
    """
    if subscription is None:
        raise ExportLimitError("An active plan is required to export", details={"remaining": 0})
    plan = resolve_plan(subscription.tier)
    if plan.is_unlimited:
        return subscription
    if subscription.remaining_exports <= 0:
        raise ExportLimitError(
            f"No exports remaining on the {plan.name} plan",
            details={"tier": plan.tier, "remaining": 0},
        )
    return replace(subscription, remaining_exports=subscription.remaining_exports - 1)


def can_use_fix(subscription: Optional[Subscription]) -> bool:
    if subscription is None:
        return False
    plan = resolve_plan(subscription.tier)
    return plan.is_unlimited or subscription.fixes_used < plan.fixes


def consume_fix(subscription: Optional[Subscription]) -> Subscription:
    if not can_use_fix(subscription):
        raise FixLimitError("No resume fixes remaining on this plan")
    plan = resolve_plan(subscription.tier)
    if plan.is_unlimited:
        return subscription
    return replace(subscription, fixes_used=subscription.fixes_used + 1)
