"""
Pricing Sheet Builder - Renders the tier table into a flat pricing sheet.

One row per tier and billing cycle, in rank order, with effective monthly
rates and annual savings. Writes the sheet as CSV plus a JSON build report.
"""
import pandas as pd
import json
from datetime import datetime
from typing import Optional

from ..config.settings import get_settings, Settings
from ..engine.models import BillingCycle
from ..engine.tier_table import DEFAULT_TABLE, TIER_RANKS, TierPricingTable


SHEET_COLUMNS = [
    'Tier', 'Display Name', 'Rank', 'Cycle', 'Months', 'Price',
    'Effective Monthly', 'Savings Amount', 'Savings %', 'Benefits', 'Color',
]


def build_pricing_frame(table: Optional[TierPricingTable] = None) -> pd.DataFrame:
    """
    Build the pricing sheet as a DataFrame.

    Savings columns are only filled on annual rows; monthly rows carry 0.
    """
    table = table or DEFAULT_TABLE

    rows = []
    for tier in table.get_all_tiers():
        config = table.get_tier_config(tier)
        savings = table.calculate_savings(tier)
        for cycle in BillingCycle:
            is_annual = cycle == BillingCycle.ANNUAL
            rows.append({
                'Tier': tier.value,
                'Display Name': config.display_name,
                'Rank': TIER_RANKS[tier],
                'Cycle': cycle.value,
                'Months': table.get_billing_period_months(cycle),
                'Price': float(table.get_tier_price(tier, cycle)),
                'Effective Monthly': float(table.get_effective_monthly_rate(tier, cycle)),
                'Savings Amount': float(savings.amount) if is_annual else 0.0,
                'Savings %': savings.percentage if is_annual else 0,
                'Benefits': len(config.benefits),
                'Color': config.color,
            })

    frame = pd.DataFrame(rows, columns=SHEET_COLUMNS)
    frame['Price'] = frame['Price'].round(2)
    frame['Effective Monthly'] = frame['Effective Monthly'].round(4)
    frame['Savings Amount'] = frame['Savings Amount'].round(2)
    return frame


def build_pricing_sheet(
    settings: Optional[Settings] = None,
    table: Optional[TierPricingTable] = None,
    verbose: bool = True,
) -> dict:
    """
    Validate the tier table and write the pricing sheet.

    Args:
        settings: Optional settings override
        table: Optional table override (defaults to the built-in table)
        verbose: Print progress messages

    Returns:
        Build report dictionary
    """
    settings = settings or get_settings()
    table = table or DEFAULT_TABLE

    report = {
        "timestamp": datetime.now().isoformat(),
        "status": "pending",
        "currency": settings.currency,
        "metrics": {},
        "warnings": [],
        "errors": []
    }

    validation = table.validate()
    report["warnings"].extend(validation.warnings)
    if not validation.valid:
        report["errors"].extend(validation.errors)
        report["status"] = "failed"
        if verbose:
            print("CRITICAL ERROR: tier table failed validation.")
            for err in validation.errors:
                print(f"  {err}")
        _write_report(report, settings, verbose)
        return report

    try:
        frame = build_pricing_frame(table)
    except Exception as e:
        msg = f"ERROR: Failed to build pricing sheet. {e}"
        report["errors"].append(msg)
        report["status"] = "failed"
        if verbose:
            print(msg)
        _write_report(report, settings, verbose)
        return report

    annual = frame[frame['Cycle'] == BillingCycle.ANNUAL.value]
    report["metrics"]["tier_count"] = int(frame['Tier'].nunique())
    report["metrics"]["row_count"] = len(frame)
    report["metrics"]["savings_pct"] = {
        row['Tier']: int(row['Savings %']) for _, row in annual.iterrows()
    }

    output_path = settings.pricing_sheet
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(output_path, index=False)
    report["output_file"] = str(output_path)
    report["status"] = "success"

    if verbose:
        print(f"\nPROCESS COMPLETE: {output_path} generated with {len(frame)} rows.")

    _write_report(report, settings, verbose)
    return report


def _write_report(report: dict, settings: Settings, verbose: bool):
    report_path = settings.build_report
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, 'w') as f:
        json.dump(report, f, indent=2)

    if verbose:
        print(f"Build report saved to: {report_path}")


if __name__ == "__main__":
    build_pricing_sheet()
