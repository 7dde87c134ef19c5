#!/usr/bin/env python3
"""
Test runner for rosa-tools.

Each test script runs in its own interpreter so that moto's patched AWS
environment never leaks between scripts. The scripts are also collected by
pytest (pip install -e .[test] && pytest).
"""

import sys
import os
import subprocess
import time

from tabulate import tabulate

TEST_SCRIPTS = [
    ("test_validation_utils.py", "Validation utilities"),
    ("test_core_clients.py", "OCM and AWS clients"),
    ("test_integration.py", "Integration")
]

PACKAGES = ["models", "core", "utils", "rosa_tools"]


def missing_packages():
    """Packages the scripts import that are not laid out next to this file."""
    root = os.path.dirname(os.path.abspath(__file__))
    return [name for name in PACKAGES if not os.path.exists(os.path.join(root, name, "__init__.py"))]


def run_script(script_name):
    """Run one test script; returns (exit code, seconds)."""
    start_time = time.time()
    try:
        result = subprocess.run([sys.executable, script_name])
        returncode = result.returncode
    except OSError as e:
        print(f"❌ Error running {script_name}: {e}")
        returncode = 1
    return returncode, time.time() - start_time


def main():
    """Run every test script and print a summary table."""
    print("🚀 ROSA TOOLS - TEST RUNNER")

    missing = missing_packages()
    if missing:
        print(f"💥 Cannot run tests - missing packages: {', '.join(missing)}")
        return 1

    rows = []
    for script_name, description in TEST_SCRIPTS:
        print(f"\n{'='*60}\n🧪 {description.upper()} ({script_name})\n{'='*60}")
        if not os.path.exists(script_name):
            rows.append([description, "⚠️  missing", "-"])
            continue
        returncode, duration = run_script(script_name)
        rows.append([description, "✅ passed" if returncode == 0 else "❌ failed", f"{duration:.1f}s"])

    print(f"\n📊 FINAL TEST SUMMARY")
    print(tabulate(rows, headers=["Suite", "Result", "Duration"], tablefmt="grid"))

    failed = sum(1 for row in rows if not row[1].startswith("✅"))
    if failed:
        print(f"\n💥 {failed} TEST SUITE(S) FAILED!")
        print("Run the failing script directly for detailed error messages.")
        return 1

    print("\n🎉 ALL TESTS PASSED!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
