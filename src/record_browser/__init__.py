"""
Record Browser

Client-side view over the record store: canonical copy, search filter,
editor dialog and a command line front end.
"""

__version__ = "1.0.0"
