"""
Package entry point.

Allows running the feed via:

    python -m rhythmsfeed

This simply forwards execution to rhythmsfeed.cli.main().
"""

from rhythmsfeed.cli import main

if __name__ == "__main__":
    main()
