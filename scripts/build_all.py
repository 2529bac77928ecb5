#!/usr/bin/env python
"""
Build pipeline - validates the tier table, writes the pricing sheet and runs tests.

Usage:
    python scripts/build_all.py
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from membership_tiers.data.build_pricing_sheet import build_pricing_sheet


def main():
    print("=" * 60)
    print("MEMBERSHIP TIERS BUILD PIPELINE")
    print("=" * 60)
    print()

    # Build pricing sheet
    print("[1/2] Building tier pricing sheet...")
    report = build_pricing_sheet(verbose=True)

    if report["status"] != "success":
        print("\n❌ BUILD FAILED")
        for error in report["errors"]:
            print(f"  ERROR: {error}")
        sys.exit(1)

    print()
    print("[2/2] Running tests...")

    # Run tests
    import subprocess
    test_result = subprocess.run(
        [sys.executable, '-m', 'pytest', 'tests', '-v', '--tb=short'],
        cwd=Path(__file__).parent.parent
    )

    if test_result.returncode != 0:
        print("\n❌ TESTS FAILED")
        sys.exit(1)

    print()
    print("=" * 60)
    print("✅ BUILD COMPLETE")
    print("=" * 60)
    print()
    print("Summary:")
    print(f"  Tiers: {report['metrics']['tier_count']}")
    print(f"  Rows: {report['metrics']['row_count']}")
    for warning in report["warnings"]:
        print(f"  WARNING: {warning}")
    print()
    print("Annual Savings:")
    for tier, pct in report['metrics'].get('savings_pct', {}).items():
        print(f"  {tier}: {pct}%")


if __name__ == "__main__":
    main()
