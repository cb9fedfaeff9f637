"""Sales report API.

Seeds product transactions from a remote JSON feed into a relational store
and serves month-filtered statistics, bar-chart and pie-chart aggregates.
"""

__version__ = "0.1.0"
