"""Module entrypoint for ``python -m rfd``."""

from .cli import main


if __name__ == "__main__":
    main()
