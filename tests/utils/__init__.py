"""
Test Utilities
==============

Fakes and helpers shared by the test suite.
"""
