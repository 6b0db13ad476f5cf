"""SQLite persistence for persons and tasks."""
