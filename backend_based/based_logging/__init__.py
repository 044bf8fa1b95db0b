"""
Structured logging for Backend Based-or-Degen. Use get_logger(__name__) in every module.
"""

from backend_based.based_logging.logger import get_logger

__all__ = ["get_logger"]
