#!/usr/bin/env python3
"""GTX8 cfg group dump launcher.

Decode a cfg group binary without installing the package.

Usage:
    python main.py goodix_cfg_group.bin
    python main.py goodix_cfg_group.bin --compact --no-verify
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from gtx8_cfg.cli import main


if __name__ == "__main__":
    sys.exit(main())
