"""
Bodies and coefficient table items of a JPL DE file.

A DE header describes 13 coefficient sets: eleven stored bodies, the
nutation angles and the lunar libration angles. Earth and the Solar-System
barycenter are not stored; they are derived at query time.
"""

from enum import Enum
from typing import Dict, Tuple


class Body(Enum):
    """Solar-system bodies and layout-only pseudo items."""

    MERCURY = "mercury"
    VENUS = "venus"
    EARTH_MOON_BARYCENTER = "earth_moon_barycenter"
    MARS = "mars"
    JUPITER = "jupiter"
    SATURN = "saturn"
    URANUS = "uranus"
    NEPTUNE = "neptune"
    PLUTO = "pluto"
    MOON = "moon"
    SUN = "sun"
    EARTH = "earth"
    SOLAR_SYSTEM_BARYCENTER = "solar_system_barycenter"

    # Only present in the coefficient layout table; never queryable
    NUTATION = "nutation"
    LIBRATION = "libration"

    @property
    def is_pseudo(self) -> bool:
        """True for layout entries that are angle sets rather than positions."""
        return self in (Body.NUTATION, Body.LIBRATION)

    @property
    def is_derived(self) -> bool:
        """True for bodies computed from other entries instead of stored."""
        return self in (Body.EARTH, Body.SOLAR_SYSTEM_BARYCENTER)

    @property
    def component_count(self) -> int:
        """Number of polynomial components stored per granule."""
        return 2 if self is Body.NUTATION else 3

    @classmethod
    def from_name(cls, name: str) -> "Body":
        """Look up a body by name, enum member name or common alias.

        Args:
            name: Text such as "Mars", "EMB", "earth-moon barycenter"

        Returns:
            The matching Body

        Raises:
            ValueError: If the name is not recognized
        """
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown body: {name!r}") from None


# The 12 layout triples in the header, in file order. The libration
# triple is stored separately, after the DE number.
FILE_TABLE_ORDER: Tuple[Body, ...] = (
    Body.MERCURY,
    Body.VENUS,
    Body.EARTH_MOON_BARYCENTER,
    Body.MARS,
    Body.JUPITER,
    Body.SATURN,
    Body.URANUS,
    Body.NEPTUNE,
    Body.PLUTO,
    Body.MOON,
    Body.SUN,
    Body.NUTATION,
)

LAYOUT_ITEMS: Tuple[Body, ...] = FILE_TABLE_ORDER + (Body.LIBRATION,)

QUERYABLE_BODIES: Tuple[Body, ...] = tuple(b for b in Body if not b.is_pseudo)

# Stored items each derived body is computed from; the barycenter is the origin
DERIVED_FROM: Dict[Body, Tuple[Body, ...]] = {
    Body.EARTH: (Body.EARTH_MOON_BARYCENTER, Body.MOON),
    Body.SOLAR_SYSTEM_BARYCENTER: (),
}

_ALIASES: Dict[str, Body] = {
    "emb": Body.EARTH_MOON_BARYCENTER,
    "earth_moon_bary": Body.EARTH_MOON_BARYCENTER,
    "earthmoon": Body.EARTH_MOON_BARYCENTER,
    "ssb": Body.SOLAR_SYSTEM_BARYCENTER,
    "barycenter": Body.SOLAR_SYSTEM_BARYCENTER,
    "solar_system_bary": Body.SOLAR_SYSTEM_BARYCENTER,
    "luna": Body.MOON,
    "sol": Body.SUN,
}
