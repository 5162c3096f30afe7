"""Configuration for the pitch speller cost model."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, Dict, Mapping

import yaml

if TYPE_CHECKING:
    from spellgraph.spelling.interval import NamedUnorderedInterval
    from spellgraph.spelling.pitch import Modifier


def _default_modifier_costs() -> Dict[int, int]:
    return {0: 0, 1: 1, 2: 3}


@dataclass
class SpellerConfig:
    """Cost tables used to weight the spelling flow network."""

    # Cost of a spelling by accidental size (0 natural, 1 single, 2 double)
    modifier_costs: Dict[int, int] = field(default_factory=_default_modifier_costs)

    # Penalty per degree of augmentation/diminution, against the pivot and
    # between co-sounding voices
    deviation_cost: int = 2

    # Cost of a tendency pair with no spelling; must dominate every other cost
    forbidden_cost: int = 1000

    # Multiplier on the interval cost between each pair of co-sounding voices
    neighbor_weight: int = 1

    def modifier_cost(self, modifier: Modifier) -> int:
        """Return the cost of spelling with the given accidental."""
        size = abs(int(modifier))
        try:
            return self.modifier_costs[size]
        except KeyError:
            raise ValueError(f"No modifier cost configured for size {size}") from None

    def interval_cost(self, interval: NamedUnorderedInterval) -> int:
        """Return the cost of an augmented or diminished interval."""
        return self.deviation_cost * interval.degree

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SpellerConfig:
        """Build a config from a plain mapping, validating keys and values.

        Args:
            data: Mapping with any subset of the dataclass field names.

        Returns:
            A new SpellerConfig with defaults for missing fields.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            raise ValueError(f"Unrecognized speller config keys: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = {}
        if "modifier_costs" in data:
            costs = data["modifier_costs"]
            if not isinstance(costs, Mapping):
                raise ValueError("'modifier_costs' must be a mapping")
            kwargs["modifier_costs"] = {
                int(size): _non_negative_int("modifier_costs", cost)
                for size, cost in costs.items()
            }
        for name in ("deviation_cost", "forbidden_cost", "neighbor_weight"):
            if name in data:
                kwargs[name] = _non_negative_int(name, data[name])
        return cls(**kwargs)


def _non_negative_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"'{name}' values must be non-negative integers, got {value!r}")
    return value


def load_config_yaml(yaml_str: str) -> SpellerConfig:
    """Parse a YAML document into a SpellerConfig.

    An empty document yields the defaults.

    Raises:
        ValueError: If the document is not a mapping or holds invalid values.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    return SpellerConfig.from_dict({str(key): value for key, value in data.items()})


# Global configuration instance
SPELLER_CONFIG = SpellerConfig()
