"""Allow running the merger with ``python -m keychain_merger``."""

from .cli import main

if __name__ == "__main__":
    main()
