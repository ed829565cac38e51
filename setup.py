#!/usr/bin/env python3
"""
kvdisk Setup Script
===================
Allows installation of the kvdisk package.

Usage:
    pip install -e .           # Development install
    pip install -e .[test]     # Development install with test tools
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="kvdisk",
    version="1.0.0",
    packages=find_packages(include=["kvdisk", "kvdisk.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "kvdisk=kvdisk.cli:main",
        ],
    },
)
