# 🚨 storefront/errors/__init__.py
"""
🚨 Помилки меж системи та мапінг причин відмови купонів у повідомлення.
"""

from .custom_errors import AppError, CartPayloadError, ErrorCode, UserVisibleError
from .reason_mapper import map_rejection_to_message

__all__ = [
    "AppError",
    "UserVisibleError",
    "CartPayloadError",
    "ErrorCode",
    "map_rejection_to_message",
]
