"""Streaming pipeline: line source -> predicates -> dedup/sort/randomize -> partitioner."""
