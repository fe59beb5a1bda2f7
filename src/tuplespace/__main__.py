"""Allow running tuplespace as ``python -m tuplespace``."""

from tuplespace.cli import main

if __name__ == "__main__":
    main()
