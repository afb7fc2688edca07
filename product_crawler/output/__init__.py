"""Output files for crawled pages."""

from .result_writer import ResultWriter, run_timestamp

__all__ = ['ResultWriter', 'run_timestamp']
