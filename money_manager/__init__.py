"""
Money Manager - Source Package

A personal finance tracker: accounts, transactions, monthly EMIs and
category presets, held in one state document.

DESIGN PRINCIPLES:
1. Balances are derived, never stored
2. Every mutation leaves the document consistent and ready to persist
3. Rejected operations change nothing
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Money Manager Team"
