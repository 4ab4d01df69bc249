"""Entry point for 'python -m ledgerly'."""

from ledgerly.cli import main

if __name__ == "__main__":
    main()
