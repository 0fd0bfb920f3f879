#!/usr/bin/env python3
"""
Test runner script with common testing commands.

Usage: python run_tests.py <command>
"""

import subprocess
import sys
from pathlib import Path

PYTEST = [sys.executable, "-m", "pytest"]

# command -> (pytest arguments, description)
SUITES = {
    "all": (
        ["tests/", "--cov=src/pumpsentry", "--cov-report=html", "-v"],
        "Running all tests with coverage",
    ),
    "unit": (["tests/", "-m", "not integration", "-v"], "Running unit tests only"),
    "market": (["tests/test_market/", "-v"], "Running ingestion and scoring tests"),
    "services": (["tests/test_services/", "-v"], "Running position and alert tests"),
    "comm": (["tests/test_comm/", "-v"], "Running notification sink tests"),
    "core": (["tests/test_core/", "-v"], "Running scheduler and config tests"),
    "api": (["tests/test_webapi/", "-v"], "Running API tests"),
    "fast": (["tests/", "-q"], "Running tests without coverage (fast)"),
    "coverage": (
        ["tests/", "--cov=src/pumpsentry", "--cov-report=html", "--cov-report=term"],
        "Generating coverage report",
    ),
}


def run_command(cmd, description):
    """Run a command and print the description."""
    print(f"\n🧪 {description}")
    print("=" * 50)
    print(f"Running: {' '.join(cmd)}")
    print()

    result = subprocess.run(cmd, cwd=Path(__file__).parent)
    return result.returncode == 0


def clean():
    """Remove coverage and cache artifacts."""
    print("\n🧹 Cleaning test artifacts...")
    for pattern in [".coverage", "htmlcov", ".pytest_cache", "__pycache__", "*.pyc"]:
        subprocess.run(
            ["find", ".", "-name", pattern, "-prune", "-exec", "rm", "-rf", "{}", "+"],
            capture_output=True,
        )
    print("✅ Test artifacts cleaned!")


def main():
    """Main test runner."""
    if len(sys.argv) < 2:
        print("Usage: python run_tests.py <command>")
        print("\nAvailable commands:")
        for name, (_, description) in SUITES.items():
            print(f"  {name:<10} - {description}")
        print(f"  {'clean':<10} - Clean test artifacts")
        return

    command = sys.argv[1].lower()

    if command == "clean":
        clean()
        return

    if command not in SUITES:
        print(f"❌ Unknown command: {command}")
        return

    args, description = SUITES[command]
    success = run_command(PYTEST + args, description)

    if success:
        if command == "coverage":
            print("\n📊 HTML report: htmlcov/index.html")
        print(f"\n✅ {command.title()} tests completed successfully!")
    else:
        print(f"\n❌ {command.title()} tests failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
