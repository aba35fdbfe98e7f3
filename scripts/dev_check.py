#!/usr/bin/env python3
from __future__ import annotations

import subprocess
import sys


def run(cmd: list[str]) -> int:
    print("$", " ".join(cmd))
    return subprocess.run(cmd, check=False).returncode


def main() -> int:
    checks = [
        [sys.executable, "-m", "unittest", "discover", "-s", "tests", "-p", "test_*.py"],
        # Smoke: the CLI lays out two sample pages end to end.
        [sys.executable, "-m", "app.waterfall.main", "--columns", "2", "--pages", "2", "--seed", "1"],
    ]
    for cmd in checks:
        code = run(cmd)
        if code != 0:
            print("\n❌ dev_check failed")
            return code

    print("\n✅ dev_check passed")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
