"""Module entry point for ``python -m vmsetup``."""

from vmsetup.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
