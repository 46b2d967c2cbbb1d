"""
Package entry point.

Allows running the application via:

    python -m yogalog

This simply forwards execution to yogalog.cli.main().
"""

from yogalog.cli import main

if __name__ == "__main__":
    main()
