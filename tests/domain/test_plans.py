"""Tests for plans and export-credit accounting."""

import pytest

from resume_studio.domain.plans import (
    PLANS,
    UNLIMITED,
    ExportAllowance,
    Subscription,
    can_use_fix,
    consume_export,
    consume_fix,
    resolve_plan,
)
from resume_studio.errors import ExportLimitError, FixLimitError, UnknownPlanError


def test_plan_catalogue():
    assert PLANS["basic"].exports == 2
    assert PLANS["premium"].exports == 6
    assert PLANS["unlimited"].is_unlimited
    assert not PLANS["basic"].is_unlimited


def test_resolve_plan_is_case_insensitive():
    assert resolve_plan(" Premium ").tier == "premium"


def test_resolve_unknown_plan():
    with pytest.raises(UnknownPlanError) as exc_info:
        resolve_plan("gold")
    assert exc_info.value.details["available"] == ["basic", "premium", "unlimited"]


def test_no_subscription_cannot_export():
    with pytest.raises(ExportLimitError):
        consume_export(None)


def test_basic_plan_allows_two_exports():
    sub = Subscription.start("basic")
    sub = consume_export(sub)
    sub = consume_export(sub)
    assert sub.remaining_exports == 0
    with pytest.raises(ExportLimitError):
        consume_export(sub)


def test_consume_export_returns_new_subscription():
    sub = Subscription.start("premium")
    after = consume_export(sub)
    assert sub.remaining_exports == 6
    assert after.remaining_exports == 5


def test_unlimited_plan_never_decrements():
    sub = Subscription.start("unlimited")
    for _ in range(5):
        sub = consume_export(sub)
    assert sub.remaining_exports == UNLIMITED


def test_free_allowance():
    allowance = ExportAllowance.from_subscription(None)
    assert allowance.plan_name == "Free"
    assert allowance.remaining == 0
    assert not allowance.is_unlimited


def test_allowance_counts_used_exports():
    sub = consume_export(Subscription.start("premium"))
    allowance = ExportAllowance.from_subscription(sub)
    assert (allowance.total, allowance.used, allowance.remaining) == (6, 1, 5)
    assert allowance.to_dict()["plan_name"] == "Premium"


def test_basic_plan_has_one_fix():
    sub = Subscription.start("basic")
    assert can_use_fix(sub)
    sub = consume_fix(sub)
    assert not can_use_fix(sub)
    with pytest.raises(FixLimitError):
        consume_fix(sub)


def test_free_tier_has_no_fixes():
    assert not can_use_fix(None)
    with pytest.raises(FixLimitError):
        consume_fix(None)
