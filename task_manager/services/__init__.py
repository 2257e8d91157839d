"""Business operations for Task Manager."""
