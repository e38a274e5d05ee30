"""
Loading Document History Format files.

- load_document: read a DHF JSON file
- document_from_json / document_from_dict: parse already-read data
- dump_document: write a Document back as JSON
"""

from .loader import document_from_dict, document_from_json, dump_document, load_document

__all__ = [
    "document_from_dict",
    "document_from_json",
    "dump_document",
    "load_document",
]
