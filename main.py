"""Entry point for running the speed probe."""

from __future__ import annotations

import sys

from netbolt.cli import main


if __name__ == "__main__":
    sys.exit(main())
