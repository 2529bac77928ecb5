"""
Tiers API - FastAPI router for read-only tier pricing queries.
"""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Optional

from ..config.settings import get_settings
from ..engine.models import (
    BillingCycle,
    InvalidArgumentError,
    Tier,
    parse_billing_cycle,
    parse_tier,
)
from ..engine.tier_table import DEFAULT_TABLE, TIER_RANKS

router = APIRouter(prefix="/api/tiers", tags=["tiers"])

table = DEFAULT_TABLE


# Pydantic models for API
class TierSummary(BaseModel):
    """Response model for a tier listing entry."""
    tier: str
    rank: int
    display_name: str
    description: str
    monthly: float
    annual: float
    color: str


class TierDetail(TierSummary):
    """Response model for a full tier config."""
    benefits: list[str]
    next_tier: Optional[str]


class PriceResponse(BaseModel):
    """Response model for a price lookup."""
    tier: str
    cycle: str
    price: float
    months: int
    effective_monthly: float
    currency: str


class SavingsResponse(BaseModel):
    """Response model for annual savings."""
    tier: str
    amount: float
    percentage: int
    currency: str


class NextTierResponse(BaseModel):
    tier: str
    next_tier: Optional[str]


class UpgradeResponse(BaseModel):
    current_tier: str
    target_tier: str
    valid: bool


def _tier_or_400(value: str) -> Tier:
    try:
        return parse_tier(value)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _cycle_or_400(value: str) -> BillingCycle:
    try:
        return parse_billing_cycle(value)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _summary(tier: Tier) -> dict:
    config = table.get_tier_config(tier)
    return {
        "tier": tier.value,
        "rank": TIER_RANKS[tier],
        "display_name": config.display_name,
        "description": config.description,
        "monthly": float(config.pricing.monthly),
        "annual": float(config.pricing.annual),
        "color": config.color,
    }


# Endpoints

@router.get("", response_model=list[TierSummary])
async def list_tiers():
    """List all tiers in rank order."""
    return [TierSummary(**_summary(tier)) for tier in table.get_all_tiers()]


@router.get("/{tier}", response_model=TierDetail)
async def get_tier(tier: str):
    """Get the full config for a tier."""
    member = _tier_or_400(tier)
    next_tier = table.get_next_tier(member)
    return TierDetail(
        **_summary(member),
        benefits=list(table.get_tier_benefits(member)),
        next_tier=next_tier.value if next_tier else None,
    )


@router.get("/{tier}/price", response_model=PriceResponse)
async def get_price(tier: str, cycle: str = BillingCycle.MONTHLY.value):
    """Get the price for a tier and billing cycle."""
    member = _tier_or_400(tier)
    billing_cycle = _cycle_or_400(cycle)
    return PriceResponse(
        tier=member.value,
        cycle=billing_cycle.value,
        price=float(table.get_tier_price(member, billing_cycle)),
        months=table.get_billing_period_months(billing_cycle),
        effective_monthly=float(table.get_effective_monthly_rate(member, billing_cycle)),
        currency=get_settings().currency,
    )


@router.get("/{tier}/savings", response_model=SavingsResponse)
async def get_savings(tier: str):
    """Get the annual billing savings for a tier."""
    member = _tier_or_400(tier)
    savings = table.calculate_savings(member)
    return SavingsResponse(
        tier=member.value,
        amount=float(savings.amount),
        percentage=savings.percentage,
        currency=get_settings().currency,
    )


@router.get("/{tier}/next", response_model=NextTierResponse)
async def get_next(tier: str):
    member = _tier_or_400(tier)
    next_tier = table.get_next_tier(member)
    return NextTierResponse(tier=member.value, next_tier=next_tier.value if next_tier else None)


@router.get("/{current_tier}/upgrade/{target_tier}", response_model=UpgradeResponse)
async def check_upgrade(current_tier: str, target_tier: str):
    """Check whether moving from current_tier to target_tier is an upgrade."""
    current = _tier_or_400(current_tier)
    target = _tier_or_400(target_tier)
    return UpgradeResponse(
        current_tier=current.value,
        target_tier=target.value,
        valid=table.is_valid_tier_upgrade(current, target),
    )
