"""Command-line interface modules."""

from .confab_report import main as confab_report_main

__all__ = [
    "confab_report_main",
]
