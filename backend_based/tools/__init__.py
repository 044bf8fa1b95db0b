"""Command-line tools (run with python -m backend_based.tools.<name>)."""
