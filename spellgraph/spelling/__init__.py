"""Pitch value types and the minimum-cut pitch speller."""
