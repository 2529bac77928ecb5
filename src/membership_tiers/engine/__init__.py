"""Engine subpackage - tier table and pricing derivations."""
from .tier_table import TierPricingTable, TIER_CONFIGS, DEFAULT_TABLE
from .models import (
    Tier,
    BillingCycle,
    TierConfig,
    TierPricing,
    Savings,
    InvalidArgumentError,
    parse_tier,
    parse_billing_cycle,
)

__all__ = [
    'TierPricingTable', 'TIER_CONFIGS', 'DEFAULT_TABLE',
    'Tier', 'BillingCycle', 'TierConfig', 'TierPricing', 'Savings',
    'InvalidArgumentError', 'parse_tier', 'parse_billing_cycle',
]
