"""
Utility modules for Serenity.

Provides structured logging and other supporting functionality.
"""

from .logging import StructuredLogger, LogContext, get_logger, redact_secrets

__all__ = ['StructuredLogger', 'LogContext', 'get_logger', 'redact_secrets']
