"""
kvdisk: Persistent Key-Value Store

A small on-disk key-value store. Values live in files named by the MD5
hash of their key; a JSON index records which keys exist.
"""

__version__ = "1.0.0"
