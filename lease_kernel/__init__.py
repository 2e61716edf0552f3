"""
Lease Kernel

Shared foundation for the lease accounting core:
- Structured JSON logging
- Typed exception hierarchy with machine-readable codes
- Injectable clock
- Ledger account roles and mappings
"""

__version__ = "0.1.0"
