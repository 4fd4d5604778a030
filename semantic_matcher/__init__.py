"""
Semantic Matcher - text similarity search over a ChromaDB collection.
"""

__version__ = "2.0.0"
