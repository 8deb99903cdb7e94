"""Merechat Domain Layer."""
