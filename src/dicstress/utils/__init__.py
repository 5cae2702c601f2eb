"""
工具模块
"""

from .utils import field_statistics, setup_logging

__all__ = ["field_statistics", "setup_logging"]
