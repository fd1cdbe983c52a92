"""
Budget Planner: 50/30/20 personal budget service.
"""

__version__ = "1.0.0"
