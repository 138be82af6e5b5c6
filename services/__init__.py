"""
services/ - Business Logic
==========================
Workflows built on top of the repositories: visit import and exports.
"""
