"""
txshield: transaction-safety heuristics for wallet transfer confirmation.

Flags address poisoning (lookalike recipients seeded into a wallet's history)
and name-resolution attacks (typosquatted or drop-caught domains). Pure,
synchronous detection; transaction history, owned accounts and the domain
resolution ledger are supplied by the caller.
"""

__version__ = "0.1.0"
