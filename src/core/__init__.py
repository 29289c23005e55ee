"""
Core fixed-point arithmetic, value objects, and serialization contracts.

This module contains the foundational building blocks that are independent
of any host environment (no I/O beyond loading bundled JSON schemas).
"""
