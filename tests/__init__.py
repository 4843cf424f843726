"""Test suite for minutes2docx.

This package contains all automated tests for the minutes2docx application,
organized to mirror the source code structure.

Running Tests:
    pytest                                  # Run all tests
    pytest -v                               # Verbose output
    pytest tests/test_cli.py                # Run specific file
    pytest -s                               # Don't capture output (for debugging)
    pytest -k "table"                       # Run tests with matching pattern in function name

Debugging Tests:
    - Use breakpoint() in test code, then run with pytest -s
    - Use pytest --pdb to drop into debugger on failure

Notes:
    - Monkeypatch for changing values (sys.argv, env vars, ~/Documents)
    - .docx output is checked by reading the bytes back with python-docx
    - Aim for testing behavior, not implementation details
"""
