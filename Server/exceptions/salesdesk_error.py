"""
SalesDesk Server - Base Error Exception

Base exception class for all users manager errors.
"""


class SalesDeskError(Exception):
    """Base exception for users manager errors."""
    pass
