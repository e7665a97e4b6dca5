"""
Core utilities: exceptions and cross-cutting concerns shared by the
similarity, history, ledger and policy layers.
"""
