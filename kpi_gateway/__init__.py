"""HTTP gateway in front of the spreadsheet-backed KPI script backend."""

__version__ = "1.0.0"
