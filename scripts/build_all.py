#!/usr/bin/env python
"""
Build pipeline - validates the pricing catalog and runs the test suite.

Usage:
    python scripts/build_all.py
"""
import subprocess
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from quote_tool.config.logging_config import setup_logging
from quote_tool.data.build_catalog import build_catalog_report


def main():
    setup_logging("INFO")
    project_root = Path(__file__).parent.parent

    print("=" * 60)
    print("QUOTE TOOL BUILD PIPELINE")
    print("=" * 60)
    print()
    
    print("[1/2] Validating pricing catalog...")
    report = build_catalog_report()
    
    if report["status"] != "success":
        print("\n❌ BUILD FAILED")
        for error in report["errors"]:
            print(f"  ERROR: {error}")
        sys.exit(1)
    
    print()
    print("[2/2] Running tests...")
    
    test_result = subprocess.run(
        [sys.executable, '-m', 'pytest', 'tests', '-v', '--tb=short'],
        cwd=project_root
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
    print(f"  Steps: {report['metrics']['step_count']}")
    print(f"  Options: {report['metrics']['option_count']}")
    low, high = report['metrics']['price_range'] or (0, 0)
    print(f"  Price range: ${low} - ${high}")
    for warning in report["warnings"]:
        print(f"  WARNING: {warning}")
    print()
    print("Options per step:")
    for title, count in report['metrics']['options_per_step'].items():
        print(f"  {title}: {count}")


if __name__ == "__main__":
    main()
