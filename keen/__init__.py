"""Keen Analytics: company financial time series lookup and chart analytics."""

__version__ = "1.0.0"
