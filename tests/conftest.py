import os
import sys

# Add the repo root to path so tests can run without installing the package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
