"""
Request Validation
==================

Turn an untrusted request body into a typed ``RenderRequest``.
"""
