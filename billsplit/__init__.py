"""
Bill Split - Source Package

Splits a shared household bill across up to three salaries.

DESIGN PRINCIPLES:
1. Salary 1 pays first, the rest is shared proportionally
2. Every cent of the bill is accounted for
3. Nobody pays more than they earn
4. Failures are reported, never raised
5. The allocation engine is pure and holds no state
"""

__version__ = "1.0.0"
__author__ = "Bill Split Team"
