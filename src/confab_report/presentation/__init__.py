"""Command-line interfaces and other presentation layer components."""

from .cli.confab_report import main as confab_report_main

__all__ = [
    "confab_report_main",
]
