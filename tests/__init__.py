"""
Test suite for Restaurant Supply Desk.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_line_item_reconciler.py -v
"""
