"""Diagnostics command-line tool."""
