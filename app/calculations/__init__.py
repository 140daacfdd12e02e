"""
Calculation Engine

Pure formula modules for the personal-finance calculators.
Every function is total over numeric input: malformed or degenerate values
produce a zero/identity result instead of an exception.
"""

from app.calculations import rates, growth, interest, deposits, retirement, withdrawal

__all__ = ["rates", "growth", "interest", "deposits", "retirement", "withdrawal"]
