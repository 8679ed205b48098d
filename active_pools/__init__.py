"""
Snapshots of DEX pools that had swap activity in a block range.
"""

__version__ = "0.1.0"
