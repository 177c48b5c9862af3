"""Command-line interface modules for gifhub pipeline execution.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from gifhub.cli.run_gifhub import run_gifhub_pipeline

__all__ = ['run_gifhub_pipeline']
