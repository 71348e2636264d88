"""Route blueprints for the relay's HTTP surface.

Currently a single blueprint, ``upload``, serving ``/upload``.
"""
