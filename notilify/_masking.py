from __future__ import annotations


def dest_hint(v: str, keep: int = 4) -> str:
    # Log-safe form of a phone number or chat id: only the last digits survive.
    v = (v or "").strip()
    if not v:
        return ""
    if len(v) <= keep:
        return v
    return f"...{v[-keep:]}"
