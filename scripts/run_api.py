#!/usr/bin/env python3
"""
API server entrypoint - validates configuration and serves the REST API with uvicorn.
"""

import argparse
import sys
from dataclasses import replace
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def main():
    parser = argparse.ArgumentParser(description="Serve the Semantic Matcher REST API")
    parser.add_argument("--host", help="Host to bind to (default: HOST or localhost)")
    parser.add_argument("--port", type=int, help="Port to serve on (default: PORT or 3000)")
    args = parser.parse_args()

    from semantic_matcher.api.main import run
    from semantic_matcher.core.config import get_settings

    settings = get_settings()
    if args.host:
        settings = replace(settings, host=args.host)
    if args.port:
        settings = replace(settings, port=args.port)

    issues = settings.validate()
    if issues:
        for issue in issues:
            print(f"❌ Configuration error: {issue}")
        return 1

    try:
        run(settings)
    except KeyboardInterrupt:
        print("\n👋 Server stopped by user")
    except Exception as e:
        print(f"❌ Server startup failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
