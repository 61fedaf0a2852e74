from typing import Final, List

RNA_ALPHABET: Final[frozenset[str]] = frozenset("ACGU")


def normalize_base(base_raw: str) -> str:
    """
    Upper-case a nucleotide base and map T->U so RNA logic can be applied uniformly.

    Parameters
    ----------
    base_raw : str
        Raw single-character nucleotide base.

    Returns
    -------
    str
        Normalized base. Symbols other than a-z/A-Z are returned unchanged.
    """
    if not isinstance(base_raw, str) or len(base_raw) != 1:
        return base_raw

    base_norm = base_raw.upper()

    return "U" if base_norm == "T" else base_norm


def normalize_sequence(raw_sequence: str) -> str:
    """
    Strip surrounding whitespace and normalize every base with `normalize_base`.

    Parameters
    ----------
    raw_sequence : str
        Sequence as typed or read from input.

    Returns
    -------
    str
        The normalized sequence, e.g. ``" acgt\\n"`` -> ``"ACGU"``.
    """
    return "".join(normalize_base(ch) for ch in raw_sequence.strip())


def non_alphabet_positions(seq: str) -> List[int]:
    """
    Indices of symbols outside {A, C, G, U}.

    Such symbols are not errors for folding; they just never pair.
    """
    return [idx for idx, ch in enumerate(seq) if ch not in RNA_ALPHABET]
