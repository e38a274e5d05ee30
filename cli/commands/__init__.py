"""
Command implementations for the dhf CLI.
"""
