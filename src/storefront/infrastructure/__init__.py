"""Інфраструктурні адаптери: межа сховища кошика."""
