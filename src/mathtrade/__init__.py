"""
mathtrade - Offer catalog and wants list validation for BoardGameGeek math trades.

Builds the catalog of offers from a BGG geek list, validates every
participant's wants list against it and merges the valid statements into one
file for the trade solver.
"""

__version__ = "1.0.0"
