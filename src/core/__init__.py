"""
Core arithmetic engine and domain types.

This package contains the arbitrary-precision integer and fraction engine
together with the value types built on it. It has no dependency on the
interactive evaluator.
"""
