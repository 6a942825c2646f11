"""Allow running todolint as ``python -m todolint``."""

from todolint.cli import main

if __name__ == "__main__":
    main()
