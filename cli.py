#!/usr/bin/env python3
"""
CDN77 Client CLI.

Development entry point; the installed console script is `cdn77`.

Usage:
    python cli.py --help
    python cli.py billing credit-balance
    python cli.py jobs purge-all --resource-id 1234
    python cli.py --debug statistics sum traffic --from "2024-01-01 00:00" --to "2024-01-02 00:00"
"""

import sys
from pathlib import Path

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cdn77_client.main import app  # noqa: E402

if __name__ == "__main__":
    app()
