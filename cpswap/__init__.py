"""Constant-product pool math, fee calculation and instruction/log decoding."""

__version__ = "0.1.0"
__all__ = ["errors", "fees", "constant_product", "calculator", "slippage", "logparse"]