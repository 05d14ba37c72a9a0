import random
import ipaddress
from typing import Dict, Optional, List
from dataclasses import dataclass
from faker import Faker

from tries import Trie

DEFAULT_PRIVATE_WEIGHTS = {"a": 0.35, "b": 0.10, "c": 0.55}

## === Config Class === ##

@dataclass
class IPConfig:
    """
    Configuration for IPGenerator
        public_share: float, proportion of public IPs
        private_weights: dict, weights for private IPs {a: x, b: x, c: x}
        seed: int, seed for random number generator
    """
    public_share: float = 0.9  # fraction of public IPs
    private_weights: Optional[Dict[str, float]] = None  # weights for {'a','b','c'}
    seed: Optional[int] = None  # seed for random number generator

    def __post_init__(self):
        if not 0 <= self.public_share <= 1:
            raise ValueError("public_share must be between 0 and 1")
        if self.private_weights is None:
            self.private_weights = dict(DEFAULT_PRIVATE_WEIGHTS)
        if set(self.private_weights) != set(DEFAULT_PRIVATE_WEIGHTS):
            raise ValueError(f"private_weights keys must be exactly {sorted(DEFAULT_PRIVATE_WEIGHTS)}")
        weights = self.private_weights.values()
        if min(weights) < 0 or sum(weights) == 0:
            raise ValueError("private_weights must be non-negative with a positive sum")


def to_bits(address: str) -> str:
    """Bit-string trie key for an IPv4 address ("10.1.2.3", 32 bits)
    or network ("10.0.0.0/8", prefixlen bits).

    Routes keyed this way are resolved with Trie.longest_key (see route_lookup).
    """
    if "/" in address:
        net = ipaddress.IPv4Network(address, strict=False)
        return format(int(net.network_address), "032b")[:net.prefixlen]
    return format(int(ipaddress.IPv4Address(address)), "032b")


class IPGenerator:
    def __init__(self, config: IPConfig):
        self.config = config
        self.rng = random.Random(self.config.seed)

        self.fake = Faker()
        if self.config.seed is not None:
            self.fake.seed_instance(self.config.seed)
        self.priv_classes, self.weights = zip(*self.config.private_weights.items())

    def _priv_class(self):
        return self.rng.choices(self.priv_classes, weights=self.weights, k=1)[0]

    def single(self, network=False):
        if self.rng.random() > self.config.public_share:
            cls = self._priv_class()
            return self.fake.ipv4_private(network=network, address_class=cls)
        else:
            return self.fake.ipv4_public(network=network)

    def batch(self, n) -> List[str]:
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single() for _ in range(n)]

    def routes(self, n) -> List[str]:
        """n CIDR networks, e.g. '172.16.0.0/12'."""
        if n <= 0:
            raise ValueError("n must be positive")
        return [self.single(network=True) for _ in range(n)]


def build_route_table(routes, config=None) -> Trie:
    """Trie mapping each route's bit key to its CIDR string."""
    table = Trie(config)
    table.put_many((to_bits(net), str(ipaddress.IPv4Network(net, strict=False))) for net in routes)
    return table


def route_lookup(table: Trie, address: str, default=None):
    """Value of the most specific route in `table` covering `address`, else `default`."""
    route = table.longest_key(to_bits(address))
    if route is None:
        return default
    return table.get(route)
