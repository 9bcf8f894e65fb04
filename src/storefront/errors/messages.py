# 💬 storefront/errors/messages.py
"""
💬 Тексти для покупця, що відповідають кодам відмови купонів.
"""

COUPON_NOT_FOUND = "Invalid or expired coupon code."
COUPON_INACTIVE = "This coupon is not active."
COUPON_EXPIRED = "This coupon has expired."
COUPON_NOT_STARTED = "This coupon is not yet active."
COUPON_USAGE_LIMIT = "This coupon has reached its usage limit."
COUPON_BELOW_MINIMUM = "Minimum order amount of {min_purchase} required for this coupon."
COUPON_NO_MATCH = "This coupon doesn't apply to any products in your cart."
COUPON_REMOVED = 'Coupon "{name}" was removed: {reason}'
