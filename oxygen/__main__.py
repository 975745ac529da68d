"""Entry point for ``python -m oxygen``."""

from oxygen.cli import main

if __name__ == "__main__":
    main()
