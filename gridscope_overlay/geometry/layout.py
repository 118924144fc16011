"""
Layout Template Module
======================

Tiered building templates with offsets relative to a template anchor.

A template maps tier -> category -> offsets. Real positions are obtained by
translating each offset so that the template anchor lands on a real anchor:

    real = real_anchor + (offset - template_anchor)
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Tuple

from gridscope_overlay.geometry.coords import Coord

MAX_TIER = 8


@dataclass(frozen=True)
class StructureLayout:
    """
    Immutable tiered layout template.

    Attributes:
        anchor: Template-space anchor coordinate
        tiers: tier -> {category: [offsets]}
    """

    anchor: Coord
    tiers: Mapping[int, Mapping[str, Sequence[Coord]]] = field(default_factory=dict)

    def __post_init__(self):
        for tier in self.tiers:
            if not 1 <= tier <= MAX_TIER:
                raise ValueError(f"tier must be in [1, {MAX_TIER}], got {tier}")

    def buildings(self, tier: int = MAX_TIER) -> Mapping[str, Sequence[Coord]]:
        """Categories and offsets of a tier (empty if the tier is absent)."""
        return self.tiers.get(tier, {})

    def placements(self, real_anchor: Coord, tier: int = MAX_TIER) -> Iterator[Tuple[str, Coord]]:
        """
        Yield (category, real position) for every offset of a tier.

        Args:
            real_anchor: Where the template anchor lands
            tier: Template tier to expand
        """
        for category, offsets in self.buildings(tier).items():
            for offset in offsets:
                yield category, real_anchor + (offset - self.anchor)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StructureLayout":
        """
        Build a layout from its JSON-like form.

        Example:
            {
                "data": {"anchor": {"x": 25, "y": 25}},
                8: {"buildings": {"spawn": {"pos": [{"x": 25, "y": 24}]}}}
            }

        Tier keys may be ints or numeric strings.

        Raises:
            ValueError: If the anchor is missing or entries are malformed
        """
        try:
            anchor_data = data["data"]["anchor"]
            anchor = Coord(x=anchor_data["x"], y=anchor_data["y"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Layout is missing data.anchor: {e}")

        tiers: Dict[int, Dict[str, List[Coord]]] = {}
        for key, tier_data in data.items():
            if key == "data":
                continue
            try:
                tier = int(key)
                buildings = tier_data["buildings"]
                tiers[tier] = {
                    category: [Coord(x=p["x"], y=p["y"]) for p in entry["pos"]]
                    for category, entry in buildings.items()
                }
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid layout tier {key!r}: {e}")

        return cls(anchor=anchor, tiers=tiers)
