"""
Contract Deployment Wrapper
Runs scripts/deploy_contract.py
"""

import os
import subprocess
import sys

REPO_ROOT = os.path.dirname(os.path.abspath(__file__))


def main() -> int:
    print("=" * 70, file=sys.stderr)
    print("InvoiceNFT Contract Deployment", file=sys.stderr)
    print("=" * 70, file=sys.stderr)

    # Module mode from the repo root puts the local packages on sys.path
    result = subprocess.run(
        [sys.executable, "-m", "scripts.deploy_contract"],
        cwd=REPO_ROOT
    )

    return result.returncode


if __name__ == "__main__":
    sys.exit(main())
