"""DesignFlow productivity tracker.

This package is organized by feature modules (users, demands, lessons, ...)
with a thin Flask controller layer over service/repository layers.
"""
