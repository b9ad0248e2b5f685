"""
Reelfolio Core
==============

Core utilities shared by the Reelfolio modules.
"""

from .config import Config, MediaInputPolicy
from .database import Database
from .logging_service import LoggingService

__all__ = ['Config', 'MediaInputPolicy', 'Database', 'LoggingService']
