"""
Dubber 번역 코어
"""

__version__ = "0.3.0"
