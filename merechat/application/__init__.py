"""Merechat Application Layer."""
