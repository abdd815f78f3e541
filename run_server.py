"""
Gen-Form HTTP Server Entry Point.

Usage:
    python run_server.py --port 3000

    # Use environment variables
    PORT=3000 python run_server.py
"""

import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from gen_form.api.server import main


if __name__ == "__main__":
    main()
