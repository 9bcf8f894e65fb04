"""storefront: рушій ціноутворення замовлень вітрини."""

__version__ = "0.1.0"
