"""
Membership Tiers Package

Community membership tier pricing and benefits.
Provides the fixed Welcome → Premium → Elite → Enterprise table with
price lookup, effective monthly rates, annual savings and upgrade paths.
"""

__version__ = "1.0.0"
