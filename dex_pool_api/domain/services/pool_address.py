from __future__ import annotations


UNKNOWN_TOKEN_SYMBOL = "Unknown"


def normalize_pool_address(value: str, *, field_name: str = "pool_address") -> str:
    # Hex validation belongs to the chain reader and the HTTP layer; the
    # subgraph simply has no record for a malformed id.
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} is required.")
    return value.strip().lower()


def build_token_logo_url(template: str, token_address: str) -> str:
    return template.format(address=token_address)


def resolve_token_symbol(symbols: dict[str, str], token_address: str) -> str:
    symbol = symbols.get(token_address.lower())
    return symbol if symbol else UNKNOWN_TOKEN_SYMBOL
