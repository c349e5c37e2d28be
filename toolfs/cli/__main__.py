"""
Entry point for running the toolfs CLI as a module.

Usage: python -m toolfs.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
