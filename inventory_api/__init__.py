"""
Inventory API - device registry with photo storage
"""

__version__ = "1.0.0"
