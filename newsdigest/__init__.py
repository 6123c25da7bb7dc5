"""
News Digest - Article Relevance & Clustering

Scores news articles for relevance, sorts them into topical clusters and
builds the rankings and statistics behind the weekly digest, the student
news page and the interactive article database.
"""

__version__ = "0.1.0"
