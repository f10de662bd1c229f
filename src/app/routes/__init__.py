"""
Routes: 변환 페이지/API.
"""

from . import convert

__all__ = ["convert"]
