"""
Data model consumed by templates.
"""

from .tree import DataNode, format_value, split_path

__all__ = ["DataNode", "format_value", "split_path"]
