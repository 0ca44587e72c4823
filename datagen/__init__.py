"""Constraint engine of a profile-driven test data generator.

Packages:
- core: configuration, errors, fields and rules
- constraints: atomic constraint model and the wire reader registry
- restrictions: typed per-datatype restrictions
- fieldspecs: field specifications and their merge algebra
"""

__version__ = "0.1.0"
