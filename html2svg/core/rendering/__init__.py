"""
Rendering Module
===============

Browser automation turning a web page into an SVG or PDF document.

Components:
- engine: Playwright runtime and per-request page sessions
- orchestrator: Navigate, settle and capture state machine
- page_scripts: Versioned scripts evaluated inside the page
"""
