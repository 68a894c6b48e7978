"""chatmate: chess rules core for games against a text-completion opponent."""

__version__ = "0.1.0"
