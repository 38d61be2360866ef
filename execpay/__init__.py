"""execpay: executive compensation tax simulator."""

__version__ = "0.1.0"
