"""Plan catalogue endpoints for Web API v1."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter
from pydantic import BaseModel

from .....domain.plans import PLANS, Plan, resolve_plan

router = APIRouter(prefix="/plans", tags=["plans"])


class PlanResponse(BaseModel):
    tier: str
    name: str
    price: float
    exports: int
    fixes: int
    is_unlimited: bool


class PlanListResponse(BaseModel):
    plans: List[PlanResponse]


def _plan_response(plan: Plan) -> PlanResponse:
    return PlanResponse(**plan.to_dict())


@router.get("", response_model=PlanListResponse)
async def list_plans() -> PlanListResponse:
    return PlanListResponse(plans=[_plan_response(plan) for plan in PLANS.values()])


@router.get("/{tier}", response_model=PlanResponse)
async def get_plan(tier: str) -> PlanResponse:
    return _plan_response(resolve_plan(tier))
