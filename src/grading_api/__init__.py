"""Grading API service."""
