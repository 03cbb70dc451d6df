"""
Test suite for bohr_mollerup

Contains:
- tests/unit/          : Unit tests for individual modules
"""
