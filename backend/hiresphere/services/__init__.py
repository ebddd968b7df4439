"""Services — the two stateful stores that enforce HireSphere's business rules.

Invariants:
    - IdentityStore is a leaf; RecordStore depends on it only through SessionProvider
"""
