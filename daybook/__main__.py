"""
Package entry point.

Allows running the application via:

    python -m daybook

This simply forwards execution to daybook.cli.main().
"""

from daybook.cli import main

if __name__ == "__main__":
    main()
