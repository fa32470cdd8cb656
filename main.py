"""Application entrypoint for spa-prerender.
Run with: python main.py [--config prerender.config.json] [--with-build] [--debug]
"""
import sys

from prerender.cli import main

if __name__ == "__main__":
    sys.exit(main())
