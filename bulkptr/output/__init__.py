"""
Output modules for BulkPTR
"""

from .console import ConsoleOutput
from .json_export import JsonExporter, sort_outcomes

__all__ = ['ConsoleOutput', 'JsonExporter', 'sort_outcomes']
