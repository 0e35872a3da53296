# tests/__init__.py
"""
Test suite for TypeScript Source Info.
"""
