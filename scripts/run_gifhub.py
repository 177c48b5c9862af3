#!/usr/bin/env python3
"""``gifhub`` Activity GIF Runner.

Usage:
    python scripts/run_gifhub.py octocat
    python scripts/run_gifhub.py octocat -c scripts/user_config.py
    python scripts/run_gifhub.py octocat --years 2016,2017 --delay 500

Note: User config in scripts/user_config.py, expert defaults in src/gifhub/schemas/param.py
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from gifhub.cli.main import main


if __name__ == "__main__":
    sys.exit(main())
