"""Module entrypoint for ``python -m dired``."""

from dired.main import run

if __name__ == "__main__":
    run()
