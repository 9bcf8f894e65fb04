"""Спільні утиліти, помилки та метрики рушія ціноутворення."""
