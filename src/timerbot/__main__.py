"""Allow running timerbot with ``python -m timerbot``."""

from timerbot.cli import main

if __name__ == "__main__":
    main()
