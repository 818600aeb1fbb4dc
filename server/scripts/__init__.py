"""Maintenance scripts (run with python -m server.scripts.<name>)."""
