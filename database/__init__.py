"""
BaseLine Academy Database Package
Local SQLite store standing in for per-site browser storage
"""

from .schema import DatabaseManager
from .local_storage import LocalStorage

__all__ = ['DatabaseManager', 'LocalStorage']
