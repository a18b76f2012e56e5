"""SecurePOS audit ledger: role-gated sales digest recording and verification."""

__version__ = "1.0.0"
