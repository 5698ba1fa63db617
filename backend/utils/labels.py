"""Placeholder labels used when an optional label reference is missing.

Grouping always happens on these strings, never on ``None``.
"""

UNCATEGORIZED_LABEL = "Sem Categoria"
UNKNOWN_CUSTODY_LABEL = "Unknown"
DEFAULT_SECTOR_LABEL = "Outros"

CRYPTO_TOTAL_ASSET_NAME = "Total Cripto (R$)"
CRYPTO_TOTAL_CATEGORY_NAME = "Cripto Consolidado (Soma)"

DUPLICATE_NOTES_PREFIX = "[Cópia] "


def label_or(value: str | None, placeholder: str) -> str:
    """Return ``value`` stripped, or ``placeholder`` when it is empty or None."""
    if value is None:
        return placeholder
    stripped = value.strip()
    return stripped if stripped else placeholder
