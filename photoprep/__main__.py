"""
Main entry point for running the package as a module.

Usage:
    python -m photoprep resize photos/blog --author "Jane Doe" --category blog
    python -m photoprep report --category blog
"""

import sys
from .cli import main

if __name__ == '__main__':
    sys.exit(main())
