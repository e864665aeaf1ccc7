"""
Entry point for running base_reporter as a module.

Usage:
    python -m base_reporter [command] [options]
"""

from base_reporter.cli import main

if __name__ == "__main__":
    main()
