"""Allow running as ``python -m climanual``."""

from climanual.cli import main

if __name__ == "__main__":
    main()
