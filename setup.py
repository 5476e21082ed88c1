#!/usr/bin/env python3
"""Setup script for album-data package."""

from setuptools import find_packages, setup

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="album-data",
    version="0.1.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="Per-track album data with audio features and lyrics",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/album-data",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pandas>=1.3.0",
        "PyYAML>=5.4",
        "mcp>=1.0.0,<2",
        "pydantic>=2.0",
    ],
    extras_require={
        "dev": ["pytest>=6.0.0", "pytest-asyncio>=0.21"],
    },
    entry_points={
        "console_scripts": [
            "album-data=albumdata.cli:main",
            "album-data-mcp=albumdata.cli:mcp_main",
        ],
    },
    include_package_data=True,
)
