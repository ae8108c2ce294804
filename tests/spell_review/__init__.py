"""
Spelling Review Tests Package
=============================
Test suite for the spell_review package.

Run all tests: python3 -m pytest tests/ -v
"""
