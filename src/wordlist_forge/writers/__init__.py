"""Output partitioners: single sink, size-bounded split, percentage split."""

from .base import ArtifactWriter, ConfirmPolicy, Partitioner
from .registry import get_partitioner, register_partitioner

__all__ = ["ArtifactWriter", "ConfirmPolicy", "Partitioner", "get_partitioner", "register_partitioner"]
