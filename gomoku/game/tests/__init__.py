"""
Tests for the board model.
"""
