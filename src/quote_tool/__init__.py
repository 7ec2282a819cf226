"""
Quote Tool Package

Pricing estimation backend for a software agency's website.
Resolves project estimates using Step → Option → Timeline pipeline.
"""

__version__ = "1.0.0"
