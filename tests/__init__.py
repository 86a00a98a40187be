"""
Test Suite
==========

Unit and integration tests for the html2svg render pipeline.
"""
