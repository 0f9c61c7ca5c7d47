"""
script-tester: run records through a transform script and inspect the outcome.
"""

__version__ = "0.1.0"
