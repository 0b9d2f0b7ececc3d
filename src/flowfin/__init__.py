"""flowfin: personal-finance aggregation and amortization engine."""

__version__ = "0.1.0"
