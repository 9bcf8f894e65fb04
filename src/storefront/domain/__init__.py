"""Доменний шар: ціноутворення та купони."""
