"""Chat Application Layer."""
