"""
Expense Tracker - Source Package

A personal expense-tracking command-line tool. Expenses and monthly
budgets live in one JSON file; totals, monthly summaries and CSV exports
are derived from it on demand.

DESIGN PRINCIPLES:
1. Validate at the edge, compute in the middle
2. Fail early, fail visibly
3. No silent corrections
4. Every mutation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
