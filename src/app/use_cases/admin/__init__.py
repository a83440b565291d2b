"""
Admin Use Cases

Maintenance operations invoked by internal services.
"""

from .purge_expired_tokens_use_case import PurgeExpiredTokensUseCase

__all__ = [
    "PurgeExpiredTokensUseCase",
]
