"""
Test suite for the frameshop pricing engine.
"""
