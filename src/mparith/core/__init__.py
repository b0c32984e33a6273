"""
Core domain models, mathematical kernels, and contracts.

This module contains the multiprecision building blocks: the Bignum value
buffer and configuration, the arithmetic and transcendental kernels, and
the JSON Schema contracts for serialized values and configuration.
"""
