"""Entry point for the caseflow CLI.

Usage:
    python -m caseflow.interfaces.cli.main

Or via installed entry point:
    caseflow <command>
"""

from caseflow.interfaces.cli import app


def main() -> None:
    """Run the caseflow CLI application."""
    app()


if __name__ == "__main__":
    main()
