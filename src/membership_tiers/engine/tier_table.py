"""
Tier Pricing Table - Membership tier pricing, benefits and upgrade paths.

Platform-level community membership, not per-creator subscriptions.
The table is built once at import and exposed read-only; every query is a
pure lookup or a small Decimal calculation over it.
"""
from decimal import Decimal, ROUND_HALF_UP
from types import MappingProxyType
from typing import Mapping, Optional

from .models import (
    BillingCycle,
    Savings,
    Tier,
    TierConfig,
    TierPricing,
    ValidationResult,
)


# Rank order, lowest first
TIER_ORDER: tuple[Tier, ...] = (
    Tier.WELCOME,
    Tier.PREMIUM,
    Tier.ELITE,
    Tier.ENTERPRISE,
)

TIER_RANKS: Mapping[Tier, int] = MappingProxyType({
    Tier.WELCOME: 1,
    Tier.PREMIUM: 2,
    Tier.ELITE: 3,
    Tier.ENTERPRISE: 4,
})

BILLING_PERIOD_MONTHS: Mapping[BillingCycle, int] = MappingProxyType({
    BillingCycle.MONTHLY: 1,
    BillingCycle.ANNUAL: 12,
})


TIER_CONFIGS: Mapping[Tier, TierConfig] = MappingProxyType({
    Tier.WELCOME: TierConfig(
        name="welcome",
        display_name="Welcome Package",
        description="Start your community journey",
        pricing=TierPricing(monthly=Decimal("2.99"), annual=Decimal("29.99")),
        benefits=(
            "Access to community forums and discussions",
            "Member badge in community",
            "Weekly community newsletters",
            "Access to community events calendar",
            "Exclusive member discounts (up to 5%)",
            "Member-only resource library",
        ),
        color="blue",
    ),
    Tier.PREMIUM: TierConfig(
        name="premium",
        display_name="Premium Member",
        description="Enhanced community experience",
        pricing=TierPricing(monthly=Decimal("9.99"), annual=Decimal("99.99")),
        benefits=(
            "Everything in Welcome Package",
            "Priority support from our team",
            "Exclusive webinars and workshops (monthly)",
            "Monthly live Q&A sessions with community leaders",
            "Premium member badge highlighting your tier",
            "Ad-free browsing experience",
            "Early access to new community features",
            "Exclusive networking opportunities",
            "Member-exclusive discount code (up to 15%)",
        ),
        color="purple",
    ),
    Tier.ELITE: TierConfig(
        name="elite",
        display_name="Elite Member",
        description="Premium access and recognition",
        pricing=TierPricing(monthly=Decimal("19.99"), annual=Decimal("199.99")),
        benefits=(
            "Everything in Premium Member",
            "Dedicated Elite support channel with fast response",
            "Bi-weekly one-on-one consultation calls (30 min)",
            "Exclusive Elite-only content and resources",
            "Elite badge with special recognition in community",
            "Direct access to community leadership team",
            "Exclusive Elite networking events quarterly",
            "Premium discounts on all services (up to 20%)",
            "Early access to major platform updates and beta features",
            "Personalized onboarding and guidance",
            "VIP members directory listing",
        ),
        color="rose",
    ),
    Tier.ENTERPRISE: TierConfig(
        name="enterprise",
        display_name="Enterprise Member",
        description="Ultimate premium experience",
        pricing=TierPricing(monthly=Decimal("49.99"), annual=Decimal("499.99")),
        benefits=(
            "Everything in Elite Member",
            "24/7 dedicated enterprise support with priority handling",
            "Weekly one-on-one consultation calls (1 hour each)",
            "Custom content creation tailored to your needs",
            "Enterprise badge with platinum recognition",
            "Direct phone line to community leadership",
            "Invitation to exclusive quarterly enterprise summits",
            "Premium concierge service for all requests",
            "Immediate access to all beta features and new releases",
            "Dedicated success manager assigned to your account",
            "Custom integration support for your use cases",
            "Enterprise-only exclusive event invitations",
            "Annual strategic planning session with leadership",
            "Premium merchandise and gifts (quarterly shipments)",
            "Lifetime member status with legacy benefits",
        ),
        color="orange",
    ),
})


class TierPricingTable:
    """
    Read-only query service over a tier configuration table.

    Upgrade ordering comes from TIER_RANKS, never from the iteration
    order of the config mapping.
    """

    def __init__(self, configs: Optional[Mapping[Tier, TierConfig]] = None):
        """Wrap a config mapping (defaults to TIER_CONFIGS)."""
        self.configs = TIER_CONFIGS if configs is None else MappingProxyType(dict(configs))

    def get_tier_config(self, tier: Tier) -> TierConfig:
        return self.configs[tier]

    def get_tier_price(self, tier: Tier, cycle: BillingCycle) -> Decimal:
        """Get the list price charged per billing period."""
        return self.configs[tier].pricing.for_cycle(cycle)

    @staticmethod
    def get_billing_period_months(cycle: BillingCycle) -> int:
        return BILLING_PERIOD_MONTHS[cycle]

    def get_effective_monthly_rate(self, tier: Tier, cycle: BillingCycle) -> Decimal:
        """
        Normalize a tier price to a per-month figure.

        Monthly prices come back unchanged; annual prices are divided by 12
        so the two cycles can be compared directly.
        """
        price = self.get_tier_price(tier, cycle)
        months = self.get_billing_period_months(cycle)
        return price / months

    @staticmethod
    def get_all_tiers() -> list[Tier]:
        """Get all tiers in rank order (new list on every call)."""
        return list(TIER_ORDER)

    def get_tier_display_name(self, tier: Tier) -> str:
        return self.configs[tier].display_name

    def get_tier_description(self, tier: Tier) -> str:
        return self.configs[tier].description

    def get_tier_benefits(self, tier: Tier) -> tuple[str, ...]:
        return self.configs[tier].benefits

    @staticmethod
    def is_valid_tier_upgrade(current_tier: Tier, target_tier: Tier) -> bool:
        """An upgrade must move strictly up in rank."""
        return TIER_RANKS[target_tier] > TIER_RANKS[current_tier]

    @staticmethod
    def get_next_tier(tier: Tier) -> Optional[Tier]:
        """Get the tier one rank above, or None at the top."""
        rank = TIER_RANKS[tier]
        if rank >= len(TIER_ORDER):
            return None
        # Ranks are 1-based, so the next tier sits at index == rank
        return TIER_ORDER[rank]

    def calculate_savings(self, tier: Tier) -> Savings:
        """
        Calculate the annual billing discount for a tier.

        amount = monthly * 12 - annual
        percentage = amount / (monthly * 12) * 100, rounded half up
        """
        monthly_price = self.get_tier_price(tier, BillingCycle.MONTHLY)
        annual_price = self.get_tier_price(tier, BillingCycle.ANNUAL)

        annual_monthly_equivalent = monthly_price * BILLING_PERIOD_MONTHS[BillingCycle.ANNUAL]
        amount = annual_monthly_equivalent - annual_price
        percentage = (amount / annual_monthly_equivalent * 100).quantize(
            Decimal("1"), rounding=ROUND_HALF_UP
        )
        return Savings(amount=amount, percentage=int(percentage))

    def validate(self) -> ValidationResult:
        """
        Check the table invariants.

        - every tier has a config whose name matches its key
        - prices strictly increase with rank for both cycles
        - annual price is below twelve monthly payments
        - benefit lists are non-empty and higher tiers open with
          "Everything in <previous tier>"
        """
        result = ValidationResult(valid=True)

        missing = [t.value for t in TIER_ORDER if t not in self.configs]
        if missing:
            result.errors.append(f"Missing tier configs: {', '.join(missing)}")
            result.valid = False
            return result

        extra = [str(k) for k in self.configs if k not in TIER_RANKS]
        if extra:
            result.errors.append(f"Unknown tier configs: {', '.join(extra)}")

        previous = None
        for tier in TIER_ORDER:
            config = self.configs[tier]
            pricing = config.pricing

            if config.name != tier.value:
                result.errors.append(f"{tier}: name {config.name!r} does not match tier key")

            for cycle in BillingCycle:
                if pricing.for_cycle(cycle) < 0:
                    result.errors.append(f"{tier}: negative {cycle} price")

            if pricing.annual >= pricing.monthly * 12:
                result.errors.append(
                    f"{tier}: annual price {pricing.annual} is not below 12 x monthly {pricing.monthly}"
                )

            if not config.benefits:
                result.errors.append(f"{tier}: benefit list is empty")

            if previous is not None:
                prev_pricing = self.configs[previous].pricing
                for cycle in BillingCycle:
                    if pricing.for_cycle(cycle) <= prev_pricing.for_cycle(cycle):
                        result.errors.append(
                            f"{tier}: {cycle} price {pricing.for_cycle(cycle)} "
                            f"does not exceed {previous} price {prev_pricing.for_cycle(cycle)}"
                        )

                expected_lead = f"Everything in {self.configs[previous].display_name}"
                if config.benefits and config.benefits[0] != expected_lead:
                    result.warnings.append(
                        f"{tier}: benefits should open with {expected_lead!r}"
                    )

            previous = tier

        result.valid = not result.errors
        return result


# Process-wide default table
DEFAULT_TABLE = TierPricingTable()


def get_tier_config(tier: Tier) -> TierConfig:
    return DEFAULT_TABLE.get_tier_config(tier)


def get_tier_price(tier: Tier, cycle: BillingCycle) -> Decimal:
    return DEFAULT_TABLE.get_tier_price(tier, cycle)


def get_billing_period_months(cycle: BillingCycle) -> int:
    return DEFAULT_TABLE.get_billing_period_months(cycle)


def get_effective_monthly_rate(tier: Tier, cycle: BillingCycle) -> Decimal:
    return DEFAULT_TABLE.get_effective_monthly_rate(tier, cycle)


def get_all_tiers() -> list[Tier]:
    return DEFAULT_TABLE.get_all_tiers()


def get_tier_display_name(tier: Tier) -> str:
    return DEFAULT_TABLE.get_tier_display_name(tier)


def get_tier_description(tier: Tier) -> str:
    return DEFAULT_TABLE.get_tier_description(tier)


def get_tier_benefits(tier: Tier) -> tuple[str, ...]:
    return DEFAULT_TABLE.get_tier_benefits(tier)


def is_valid_tier_upgrade(current_tier: Tier, target_tier: Tier) -> bool:
    return DEFAULT_TABLE.is_valid_tier_upgrade(current_tier, target_tier)


def get_next_tier(tier: Tier) -> Optional[Tier]:
    return DEFAULT_TABLE.get_next_tier(tier)


def calculate_savings(tier: Tier) -> Savings:
    return DEFAULT_TABLE.calculate_savings(tier)


def validate_table() -> ValidationResult:
    """Check the invariants of the default table."""
    return DEFAULT_TABLE.validate()
