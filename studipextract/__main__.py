"""
Package entry point.

Allows running the application via:

    python -m studipextract

This simply forwards execution to studipextract.cli.main().
"""

from studipextract.cli import main

if __name__ == "__main__":
    main()
