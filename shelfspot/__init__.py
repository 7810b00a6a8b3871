"""
ShelfSpot product catalog: REST API, catalog client and smart search.
"""

__version__ = "1.0.0"
