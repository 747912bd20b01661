"""State layer.

Holds the one piece of mutable shared state in the exporter: the
outcome of the most recent fetch.
"""
