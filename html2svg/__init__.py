"""
html2svg
========

Render a web page headlessly and emit it as an SVG document or a PDF.

This package provides:
- A command-line renderer writing the document to standard output
- A FastAPI service accepting one render request per HTTP call
- A bounded-wait render pipeline driving Chromium through Playwright
- A chunked output transport safe for slow sinks
"""

__version__ = "1.0.0"
__author__ = "html2svg Team"
