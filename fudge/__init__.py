"""Fudge! - склад и витрина кондитерской лавки."""
__version__ = "0.1.0"
