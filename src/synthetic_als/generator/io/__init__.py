"""Shard file output for the generator."""
