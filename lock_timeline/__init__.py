"""
Lock Protocol Timeline Module

This module provides an interactive timeline for lock-protocol traces
(read/write lock requests, grants, releases, rejections and deadlocks),
laying out one row per actor with pan, zoom and viewport culling.
"""

__version__ = "1.0.0"
__author__ = "Lock Timeline Development Team"

from .timeline_model import TimelineModel

__all__ = ['TimelineModel']
