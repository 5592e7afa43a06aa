"""booklend - book catalog and loan ledger

This package contains the application modules:
- Data models (book.py)
- JSON codecs and file storage (serializers.py, storage.py)
- Catalog store, loan ledger and search (catalog.py, ledger.py, query.py)
- Library service facade (library.py)
- CLI interface (main.py, prompts.py, ui_helpers.py)
"""

__version__ = "1.0.0"
