"""caseflow - case management with hierarchical task trees."""

__version__ = "0.3.0"
