"""Command-line interface for the image frequency explorer.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from imgfreq.cli.runner import run_viewer, main

__all__ = ['run_viewer', 'main']
