"""Profile and store collectors."""
