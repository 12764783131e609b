"""Allow running as ``python -m vinv``."""

from vinv.cli import main

if __name__ == "__main__":
    main()
