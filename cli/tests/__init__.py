"""
Tests for the dhf command-line tool.
"""
