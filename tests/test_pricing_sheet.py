"""
Tests for the pricing sheet build (DataFrame rendering, CSV and build report).
"""
import json
import os
import sys
from dataclasses import replace
from decimal import Decimal

import pandas as pd
import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from membership_tiers.config.settings import Settings
from membership_tiers.data.build_pricing_sheet import (
    SHEET_COLUMNS,
    build_pricing_frame,
    build_pricing_sheet,
)
from membership_tiers.engine import Tier, TierPricing, TierPricingTable, TIER_CONFIGS


@pytest.fixture(scope="module")
def frame():
    return build_pricing_frame()


@pytest.fixture
def settings(tmp_path):
    return Settings.load(project_root=tmp_path)


def test_frame_shape_and_order(frame):
    assert list(frame.columns) == SHEET_COLUMNS
    assert len(frame) == 8
    assert list(frame['Tier'].unique()) == ['welcome', 'premium', 'elite', 'enterprise']
    assert list(frame['Rank']) == [1, 1, 2, 2, 3, 3, 4, 4]


def test_frame_premium_rows(frame):
    premium = frame[frame['Tier'] == 'premium'].set_index('Cycle')

    assert premium.loc['monthly', 'Price'] == pytest.approx(9.99)
    assert premium.loc['monthly', 'Savings %'] == 0
    assert premium.loc['annual', 'Price'] == pytest.approx(99.99)
    assert premium.loc['annual', 'Months'] == 12
    assert premium.loc['annual', 'Effective Monthly'] == pytest.approx(8.3325)
    assert premium.loc['annual', 'Savings Amount'] == pytest.approx(19.89)
    assert premium.loc['annual', 'Savings %'] == 17
    assert premium.loc['annual', 'Benefits'] == 9


def test_build_writes_sheet_and_report(settings):
    report = build_pricing_sheet(settings=settings, verbose=False)

    assert report["status"] == "success", report["errors"]
    assert report["metrics"]["tier_count"] == 4
    assert report["metrics"]["row_count"] == 8
    assert report["metrics"]["savings_pct"] == {
        'welcome': 16, 'premium': 17, 'elite': 17, 'enterprise': 17,
    }

    sheet = pd.read_csv(settings.pricing_sheet)
    assert list(sheet.columns) == SHEET_COLUMNS
    assert len(sheet) == 8

    with open(settings.build_report) as f:
        saved = json.load(f)
    assert saved["status"] == "success"
    assert saved["output_file"] == str(settings.pricing_sheet)


def test_build_fails_on_invalid_table(settings):
    configs = dict(TIER_CONFIGS)
    configs[Tier.ENTERPRISE] = replace(
        configs[Tier.ENTERPRISE],
        pricing=TierPricing(monthly=Decimal("9.99"), annual=Decimal("99.99")),
    )

    report = build_pricing_sheet(settings=settings, table=TierPricingTable(configs), verbose=False)

    assert report["status"] == "failed"
    assert report["errors"]
    assert not settings.pricing_sheet.exists()
    assert settings.build_report.exists()


def test_build_verbose_output(settings, capsys):
    build_pricing_sheet(settings=settings, verbose=True)
    out = capsys.readouterr().out
    assert "PROCESS COMPLETE" in out
    assert "Build report saved to" in out
