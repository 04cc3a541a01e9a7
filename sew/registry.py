"""
Action registry.

Maps action names to their encoder and usage grammar. The action set is fixed;
aliases ("x" for "hex", "z" for "zero") resolve to the same encoder instance.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from .encoders import (
    Encoder,
    HexEncoder,
    MacEncoder,
    PadEncoder,
    VlanEncoder,
    ZeroEncoder,
)
from .errors import UnknownAction


@dataclass(frozen=True)
class ActionDescriptor:
    """Static description of one action name."""

    name: str
    usage: str
    encoder: Encoder


class ActionRegistry:
    """
    Lookup table from action name to descriptor.

    Descriptors are kept in declaration order; if a name were ever declared
    twice, the first declaration wins.
    """

    def __init__(self, descriptors: Iterable[ActionDescriptor]):
        self._descriptors: Tuple[ActionDescriptor, ...] = tuple(descriptors)
        self._by_name: Dict[str, ActionDescriptor] = {}
        for descriptor in self._descriptors:
            self._by_name.setdefault(descriptor.name, descriptor)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __iter__(self):
        return iter(self._descriptors)

    def lookup(self, name: str) -> ActionDescriptor:
        """
        Get the descriptor registered under name.

        Raises:
            UnknownAction: If no action is registered under name
        """
        descriptor = self._by_name.get(name)
        if descriptor is None:
            raise UnknownAction(name)
        return descriptor


def create_registry(rng: Optional[np.random.Generator] = None) -> ActionRegistry:
    """
    Build the registry of all supported actions.

    Args:
        rng: Random generator used by "mac random". A fresh, OS-seeded
            generator is used when omitted.

    Returns:
        ActionRegistry: Registry with hex, x, pad, zero, z, mac and vlan
    """
    hex_encoder = HexEncoder()
    zero_encoder = ZeroEncoder()

    return ActionRegistry(
        [
            # common
            ActionDescriptor("hex", "hex [BYTE ...]", hex_encoder),
            ActionDescriptor("x", "x [BYTE ...]", hex_encoder),
            ActionDescriptor("pad", "pad LEN", PadEncoder()),
            ActionDescriptor("zero", "zero LEN", zero_encoder),
            ActionDescriptor("z", "z LEN", zero_encoder),
            # ethernet
            ActionDescriptor(
                "mac", "mac bc|broadcast|random|XX:XX:XX:XX:XX:XX", MacEncoder(rng)
            ),
            ActionDescriptor("vlan", "vlan VID", VlanEncoder()),
        ]
    )
