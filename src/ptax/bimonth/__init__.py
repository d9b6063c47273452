"""
PTAX Bimonth Module
"""

from ptax.bimonth.period import PeriodCalculator
from ptax.bimonth.resolver import PeriodRateResolver
from ptax.bimonth.cache import RateCache
from ptax.bimonth.service import BimonthlyRateService

__all__ = [
    "PeriodCalculator",
    "PeriodRateResolver",
    "RateCache",
    "BimonthlyRateService",
]
