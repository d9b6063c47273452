"""
PTAX Bimonthly Rate Service

Reference BRL/USD rate (Banco Central do Brasil PTAX) pinned to the first
business day of the current fiscal bimonth.
"""

__version__ = "1.0.0"
