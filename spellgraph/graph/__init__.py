"""Graph primitives and helpers.

This package provides the weighted directed `Graph`, the `UnweightedGraph`
variant, lazily composed graph schemes (`scheme`) and NetworkX conversion
(`convert`).
"""
