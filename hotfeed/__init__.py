"""
Hot Feed - "What's Hot" ranking for the trading community.

Ranks forum threads, marketplace listings and broker profiles by engagement
within a recency window and serves the result as a point-in-time feed.
"""

__version__ = "1.0.0"
