"""
Entry point for running toolfs as a module.

Usage: python -m toolfs [command] [options]
"""

from toolfs.cli.parser import main

if __name__ == "__main__":
    main()
