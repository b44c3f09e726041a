"""
Pescope Shared Module
======================

Configuration, logging and console utilities shared by pescope commands.
"""

from shared.config import PescopeConfig

__all__ = ["PescopeConfig"]
