"""Output generation: summary tables with provenance sidecar."""

from annotation_index.output.writers import write_summary_output

__all__ = ["write_summary_output"]
