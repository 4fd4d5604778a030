#!/usr/bin/env python3
"""
CLI entrypoint - interactive semantic search against the configured collection.
Pass --tui for the full-screen interface.
"""

import sys
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def main():
    from semantic_matcher.core.config import get_settings
    from semantic_matcher.tui.main import main as cli_main

    settings = get_settings()
    issues = settings.validate()
    if issues:
        for issue in issues:
            print(f"❌ Configuration error: {issue}")
        return 1

    try:
        return cli_main(sys.argv[1:], settings=settings)
    except KeyboardInterrupt:
        print("\nℹ️  Interrupted")
        return 0


if __name__ == "__main__":
    sys.exit(main())
