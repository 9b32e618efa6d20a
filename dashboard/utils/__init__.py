"""
Utility module for SmartStay Dashboard
"""

from .custom_logger import setup_logger

__all__ = [
    "setup_logger",
]
