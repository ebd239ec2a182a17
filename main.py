"""extconfig: extension discovery and load order.

Finds vendored and packaged extensions, applies the configured load
order and ignore list, and reports what the application will enable.

Usage:
    python main.py available
    python main.py enabled --locations
    python main.py --extensions dashboard,all enabled
"""

import sys
from pathlib import Path

# Allow running from a checkout without installing
sys.path.insert(0, str(Path(__file__).parent))

from dotenv import load_dotenv

load_dotenv()

from extconfig.cli.cli import main


if __name__ == "__main__":
    main()
