"""
Output Transport
================

Deliver rendered bytes to a sink in fixed-size, acknowledged writes.
"""
