"""
ROSA Tools - pre-flight validation for ROSA clusters and their AWS identity setup.
"""

__version__ = "1.0.0"
__author__ = "ROSA Tools Contributors"
