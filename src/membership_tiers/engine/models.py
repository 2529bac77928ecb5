"""
Data models for the membership tier table.

Uses enums for the closed tier/cycle sets and frozen dataclasses for the
table records so the configuration cannot be mutated after import.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Union


class InvalidArgumentError(ValueError):
    """Raised at the input boundary for an unrecognized tier or billing cycle."""


class Tier(str, Enum):
    """Membership tier. Declared in rank order."""
    WELCOME = "welcome"
    PREMIUM = "premium"
    ELITE = "elite"
    ENTERPRISE = "enterprise"

    def __str__(self) -> str:
        return self.value


class BillingCycle(str, Enum):
    """Payment period for a membership."""
    MONTHLY = "monthly"
    ANNUAL = "annual"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TierPricing:
    """Monthly and annual list prices for a tier."""
    monthly: Decimal
    annual: Decimal

    def for_cycle(self, cycle: BillingCycle) -> Decimal:
        """Get the price charged per billing period for a cycle."""
        return {
            BillingCycle.MONTHLY: self.monthly,
            BillingCycle.ANNUAL: self.annual,
        }[cycle]


@dataclass(frozen=True)
class TierConfig:
    """Complete definition of a single membership tier."""
    name: str
    display_name: str
    description: str
    pricing: TierPricing
    benefits: tuple[str, ...]  # display order
    color: str  # UI styling tag, not interpreted here


@dataclass(frozen=True)
class Savings:
    """Discount of annual billing over twelve monthly payments."""
    amount: Decimal
    percentage: int


@dataclass
class ValidationResult:
    """Result of a table invariant check."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _parse_enum(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().lower()
        for member in enum_cls:
            if member.value == key:
                return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise InvalidArgumentError(f"Unknown {label} {value!r}. Expected one of: {allowed}")


def parse_tier(value: Union[Tier, str]) -> Tier:
    """
    Convert caller input to a Tier.

    Accepts Tier members or strings (case-insensitive, surrounding
    whitespace ignored). Raises InvalidArgumentError for anything else.
    """
    return _parse_enum(Tier, value, "tier")


def parse_billing_cycle(value: Union[BillingCycle, str]) -> BillingCycle:
    """
    Convert caller input to a BillingCycle.

    Raises InvalidArgumentError for anything other than monthly/annual.
    """
    return _parse_enum(BillingCycle, value, "billing cycle")
