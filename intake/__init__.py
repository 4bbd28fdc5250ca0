"""
Document intake service: keyword tagging, complexity scoring and section
extraction for uploaded text documents.
"""

__version__ = '1.0.0'
