#!/usr/bin/env python3
"""
Setup configuration for chart-resolver
Resolves yearly chart entries to their best matching Spotify tracks
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "spotipy>=2.23.0",
    "requests>=2.31.0",
    "pyyaml>=6.0.1",
    "click>=8.1.7",
    "tqdm>=4.66.1",
    "rich>=13.7.0",
    "rich-click>=1.7.0",
]

setup(
    name="chart-resolver",
    version="0.1.0",
    author="chart-resolver",
    description="Resolve yearly chart entries to their best matching Spotify tracks",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
        ],
    },
    entry_points={
        "console_scripts": [
            "chart-resolver=chart_resolver.cli:main",
        ],
    },
    keywords="spotify charts music matching playlist cli",
)
