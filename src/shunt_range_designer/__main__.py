"""
Shunt Range Designer - Entry Point

Run with: python -m shunt_range_designer
"""

import sys
import logging

# Setup logging before any other imports
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr),
    ]
)

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    from shunt_range_designer.cli.commands import cli

    cli(obj={})


if __name__ == "__main__":
    main()
