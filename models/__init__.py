"""
models/ - Domain Models
=======================
Plain dataclasses mirroring the rows of the four tables, plus the
Visit payload accepted by the importer.
"""
