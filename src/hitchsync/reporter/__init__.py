"""hitchsync progress reporter implementations.

Example:
    >>> from hitchsync.reporter import SimpleProgressReporter
    >>> reporter = SimpleProgressReporter()
"""

from hitchsync.reporter.simple import SimpleProgressReporter

__all__ = [
    "SimpleProgressReporter",
]
