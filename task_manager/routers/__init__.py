"""API routers for Task Manager."""
