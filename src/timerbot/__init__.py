"""timerbot - Named task timers served over the Model Context Protocol."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("timerbot")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"
