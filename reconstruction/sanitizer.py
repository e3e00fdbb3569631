"""Normalize text to the base Latin glyph set of the standard PDF fonts."""
import unicodedata


PLACEHOLDER = "?"

# Layout whitespace that survives sanitization
KEPT_WHITESPACE = frozenset("\n\r\t")

CHAR_MAP = {
    # Turkish
    "ı": "i", "İ": "I", "ğ": "g", "Ğ": "G", "ü": "u", "Ü": "U",
    "ş": "s", "Ş": "S", "ö": "o", "Ö": "O", "ç": "c", "Ç": "C",
    # Western European
    "à": "a", "á": "a", "â": "a", "ä": "a", "ã": "a", "å": "a",
    "À": "A", "Á": "A", "Â": "A", "Ä": "A", "Ã": "A", "Å": "A",
    "è": "e", "é": "e", "ê": "e", "ë": "e",
    "È": "E", "É": "E", "Ê": "E", "Ë": "E",
    "ì": "i", "í": "i", "î": "i", "ï": "i",
    "Ì": "I", "Í": "I", "Î": "I", "Ï": "I",
    "ò": "o", "ó": "o", "ô": "o", "õ": "o", "ø": "o",
    "Ò": "O", "Ó": "O", "Ô": "O", "Õ": "O", "Ø": "O",
    "ù": "u", "ú": "u", "û": "u", "Ù": "U", "Ú": "U", "Û": "U",
    "ñ": "n", "Ñ": "N", "ý": "y", "ÿ": "y", "Ý": "Y",
    "ß": "ss", "æ": "ae", "Æ": "AE", "œ": "oe", "Œ": "OE",
    # Punctuation and symbols
    "“": '"', "”": '"', "„": '"', "«": '"', "»": '"',
    "‘": "'", "’": "'", "‚": "'",
    "–": "-", "—": "-", "…": "...",
    "™": "(TM)", "©": "(C)", "®": "(R)",
    " ": " ",
}


def _is_printable_ascii(value: str) -> bool:
    return all(32 <= ord(ch) < 127 for ch in value)


def _fold(ch: str) -> str:
    if ch in CHAR_MAP:
        return CHAR_MAP[ch]
    if ch in KEPT_WHITESPACE or 32 <= ord(ch) < 127:
        return ch

    # Accented letters missing from the table, e.g. "ő" -> "o"
    decomposed = "".join(
        c for c in unicodedata.normalize("NFKD", ch) if not unicodedata.combining(c)
    )
    if decomposed and _is_printable_ascii(decomposed):
        return decomposed
    return PLACEHOLDER


def sanitize(text: str) -> str:
    """
    Map every character to printable ASCII.

    Table substitutions first, then accent stripping, then "?" for anything
    left. Newlines, carriage returns and tabs are kept for the layout step.
    """
    if not text:
        return ""
    return "".join(_fold(ch) for ch in text)
