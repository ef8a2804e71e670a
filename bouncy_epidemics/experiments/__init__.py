"""Experiment orchestration: multi-seed batches and their summaries."""

from bouncy_epidemics.experiments.batch import config_payload, run_batch, summarize_batch

__all__ = ["config_payload", "run_batch", "summarize_batch"]
