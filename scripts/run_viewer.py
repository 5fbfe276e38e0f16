#!/usr/bin/env python3
"""imgfreq runner.

Usage:
    python scripts/run_viewer.py scripts/user_config.py --view
    python scripts/run_viewer.py scripts/user_config.py --source Beach --low 20 --export beach.png
    python scripts/run_viewer.py --image https://example.org/photo.jpg --figure panels.png

Note: User config in scripts/user_config.py, expert defaults in
src/imgfreq/schemas/param.py. Install the package first (pip install -e .).
"""

import sys

from imgfreq.cli.runner import main


if __name__ == "__main__":
    sys.exit(main())
