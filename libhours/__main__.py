"""
Package entry point.

Allows running the application via:

    python -m libhours

This simply forwards execution to libhours.cli.main().
"""

from libhours.cli import main

if __name__ == "__main__":
    main()
