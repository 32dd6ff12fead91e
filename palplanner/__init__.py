"""palplanner - a virtual pet that thrives when you finish your tasks."""

__version__ = "0.1.0"
