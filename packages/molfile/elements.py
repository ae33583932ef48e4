"""Atomic symbol table (H..Og) used to resolve atom-block element symbols."""

from packages.molfile.exceptions import DomainError, MolfileErrorCode

# Periodic table order; position + 1 is the atomic number.
# fmt: off
_SYMBOLS = (
    "H", "He",
    "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar",
    "K", "Ca", "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
    "Ga", "Ge", "As", "Se", "Br", "Kr",
    "Rb", "Sr", "Y", "Zr", "Nb", "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd",
    "In", "Sn", "Sb", "Te", "I", "Xe",
    "Cs", "Ba",
    "La", "Ce", "Pr", "Nd", "Pm", "Sm", "Eu", "Gd", "Tb", "Dy", "Ho", "Er",
    "Tm", "Yb", "Lu",
    "Hf", "Ta", "W", "Re", "Os", "Ir", "Pt", "Au", "Hg",
    "Tl", "Pb", "Bi", "Po", "At", "Rn",
    "Fr", "Ra",
    "Ac", "Th", "Pa", "U", "Np", "Pu", "Am", "Cm", "Bk", "Cf", "Es", "Fm",
    "Md", "No", "Lr",
    "Rf", "Db", "Sg", "Bh", "Hs", "Mt", "Ds", "Rg", "Cn",
    "Nh", "Fl", "Mc", "Lv", "Ts", "Og",
)
# fmt: on

ATOMIC_NUMBERS: dict[str, int] = {
    symbol: number for number, symbol in enumerate(_SYMBOLS, start=1)
}

MAX_ATOMIC_NUMBER = len(_SYMBOLS)


def atomic_number(symbol: str) -> int:
    """
    Resolve an element symbol to its atomic number.

    Args:
        symbol: Element symbol as written in the atom block. Surrounding
            whitespace is ignored; case is significant ("Cl", not "CL").

    Returns:
        Atomic number in 1..118.

    Raises:
        DomainError: If the symbol is not a known element.
    """
    key = symbol.strip()
    try:
        return ATOMIC_NUMBERS[key]
    except KeyError:
        raise DomainError(
            message=f"Unknown element symbol {key!r}",
            code=MolfileErrorCode.UNKNOWN_ELEMENT,
            details={"symbol": key},
        ) from None


def element_symbol(number: int) -> str:
    """Return the element symbol for an atomic number."""
    if not 1 <= number <= MAX_ATOMIC_NUMBER:
        raise ValueError(f"Atomic number out of range: {number}")
    return _SYMBOLS[number - 1]
