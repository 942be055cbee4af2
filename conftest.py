"""Root conftest.py: make the checkout's reunion_chat package win over an installed copy."""
import os
import sys

# Insert the project root at the beginning of sys.path so that the local
# reunion_chat/ directory takes precedence over a previously installed wheel.
_project_root = os.path.dirname(os.path.abspath(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)
