"""
dhf CLI - Document History Time Travel

Commands:
- dhf show - Reconstruct a document at a commit
- dhf commits - List the commit ledger
- dhf validate - Check a DHF file for referential and data-quality issues
- dhf search - Search current and historical text
"""

__version__ = "0.1.0"
