"""
Address book with task tracking.

Subpackages:
- model: persons, tasks and the in-memory Model with its filtered views
- logic: text commands and the command parser
- storage: SQLite persistence for persons and tasks
- cli / connectors: entry point and console REPL
"""

__version__ = "0.1.0"
