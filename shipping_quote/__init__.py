"""
Shipping Quote API

Consolidates an order's items into one box and quotes it with Correios.
"""
__version__ = "1.0.0"
