"""
Test suite for bigfrac

Contains:
- tests/unit/          : Unit tests for the arithmetic core, domain types and RPN calculator
"""
