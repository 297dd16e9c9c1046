"""Interfaces layer for caseflow.

- cli: Typer command-line application
- api: FastAPI routes and app factory
"""
