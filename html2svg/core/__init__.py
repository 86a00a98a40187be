"""
Core Business Logic
==================

The render pipeline: request validation, render orchestration and output
delivery.

Components:
- request: Turn untrusted payloads into render requests
- rendering: Drive the browser engine from navigation to capture
- transport: Chunked, acknowledged delivery of the rendered bytes
- exceptions: Typed pipeline errors
"""
