"""Utilities shared across the package.

- `logger`: package-wide logger
- `globals`: constants (PDG codes, GENIE enumerations, record enumerations)
- `enums`: enumerated types built on top of the constants
- `factory`: configuration-driven class instantiation
- `kinematics`: four-vector helpers
"""
