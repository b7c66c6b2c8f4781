"""
Entry point for running code_outline as a module.

Usage: python -m code_outline [args]
"""

from code_outline.cli import main

if __name__ == "__main__":
    main()
