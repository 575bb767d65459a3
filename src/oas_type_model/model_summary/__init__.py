"""Model summary exports."""

from .summary_writer import SummaryWriteError, build_model_summary, write_model_summary

__all__ = ["SummaryWriteError", "build_model_summary", "write_model_summary"]
