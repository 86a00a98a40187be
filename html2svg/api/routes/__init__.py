"""
API Routes
==========

Route modules included by the application factory.
"""
