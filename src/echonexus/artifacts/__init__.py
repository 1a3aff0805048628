"""Artifact and status report output surface."""

from echonexus.artifacts.writer import (
    build_status_report,
    write_result_artifact,
    write_status_report,
)

__all__ = ["build_status_report", "write_result_artifact", "write_status_report"]
