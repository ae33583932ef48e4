"""
Data model for parsed MOL V2000 records.

Records are built fresh for every successful iteration step and are not
tied to the reader that produced them. Optional sections of the format
stay optional here: a section that was not present is None, never an
empty placeholder.
"""

from dataclasses import dataclass, field

Coordinates = tuple[float, float, float]


@dataclass
class Bonds:
    """Bond table as three parallel lists (1-based atom indices)."""

    atoms1: list[int] = field(default_factory=list)
    atoms2: list[int] = field(default_factory=list)
    orders: list[int] = field(default_factory=list)


@dataclass
class AromaticBonds:
    """Aromatic bond pairs. Reserved; the V2000 reader never fills it."""

    atoms1: list[int] = field(default_factory=list)
    atoms2: list[int] = field(default_factory=list)


@dataclass
class Molecule:
    """
    Atoms and bonds of one record.

    Index 0 of every per-atom list corresponds to atom 1 of the source file.
    """

    atomic_numbers: list[int]
    atom_charges: list[int] | None = None  # None when no CHG line occurred
    atom_coordinates: list[Coordinates] | None = None
    integer_bonds: Bonds | None = None
    dative_bonds: Bonds | None = None
    aromatic_bonds: AromaticBonds | None = None

    @property
    def num_atoms(self) -> int:
        return len(self.atomic_numbers)

    @property
    def num_bonds(self) -> int:
        if self.integer_bonds is None:
            return 0
        return len(self.integer_bonds.orders)


@dataclass
class Property:
    """Generic key/value property entry (not populated by the reader yet)."""

    key: str
    value: str


@dataclass
class Record:
    """One parsed molecule record from a MOL or SD file."""

    title: str
    molecule: Molecule
    properties: list[Property] = field(default_factory=list)

    # Position in the source
    record_index: int = 0
    line_number: int = 0  # 1-based line on which the record starts
