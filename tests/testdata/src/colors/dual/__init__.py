from __future__ import annotations

DUAL = ("#0000ff", "#ff0000")
