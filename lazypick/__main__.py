"""Module entrypoint for ``python -m lazypick``."""

from .cli import run


if __name__ == "__main__":
    run()
