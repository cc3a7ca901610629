"""SQLite (aiosqlite) implementations."""
