"""SQLite persistence for candidates and their interviews."""
