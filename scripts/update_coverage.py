#!/usr/bin/env python3
"""
Run the DeskForge test suite under coverage and refresh the README badge.
"""

import json
import re
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
README = REPO_ROOT / "README.md"
BADGE_PATTERN = r"!\[Coverage\]\(https://img\.shields\.io/badge/coverage-[\d.]+%25-[a-z]+\)"


def badge_color(percent):
    if percent > 80:
        return "green"
    if percent > 50:
        return "yellow"
    return "red"


def run_coverage():
    commands = [
        ["coverage", "run", "--source", "deskforge_app", "-m", "unittest", "discover", "tests"],
        ["coverage", "report"],
        ["coverage", "json", "-o", "coverage.json"],
    ]
    for command in commands:
        subprocess.run([sys.executable, "-m", *command], check=True, cwd=REPO_ROOT)


def main():
    try:
        import coverage  # noqa: F401
    except ImportError:
        print("Error: 'coverage' is not installed. Run: pip install -e '.[test]'")
        sys.exit(1)

    try:
        run_coverage()
    except subprocess.CalledProcessError:
        print("Tests failed! Leaving the badge untouched.")
        sys.exit(1)

    try:
        data = json.loads((REPO_ROOT / "coverage.json").read_text())
        total = data["totals"]["percent_covered_display"]
        color = badge_color(float(total))
    except (FileNotFoundError, KeyError, ValueError) as e:
        print(f"Error reading coverage data: {e}")
        sys.exit(1)

    print(f"Total coverage: {total}% ({color})")

    content = README.read_text()
    new_badge = f"![Coverage](https://img.shields.io/badge/coverage-{total}%25-{color})"
    if not re.search(BADGE_PATTERN, content):
        print("Could not find a coverage badge in README.md to update.")
        sys.exit(1)

    new_content = re.sub(BADGE_PATTERN, new_badge, content)
    if new_content == content:
        print("Coverage badge already up to date.")
        return
    README.write_text(new_content)
    print(f"README.md updated with new coverage badge: {total}%")


if __name__ == "__main__":
    main()
