#!/usr/bin/env python3
"""
Sample per-second rates of /proc kernel counters.

Usage (run from repo root):
    python scripts/sample_rates.py --interval 2 --count 5
    python scripts/sample_rates.py --state-dir /var/tmp/procrate
"""

import sys
from pathlib import Path

# Add repo root to Python path for procrate package import
sys.path.insert(0, str(Path(__file__).parent.parent))

from procrate.cli import main


if __name__ == "__main__":
    sys.exit(main())
