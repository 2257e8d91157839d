"""Core modules for Task Manager."""
