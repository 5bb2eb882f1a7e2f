"""Module entrypoint for ``python -m suttaviewer``.

All argument parsing and runtime setup happen in ``suttaviewer.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
