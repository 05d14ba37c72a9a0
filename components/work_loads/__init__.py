#!/usr/bin/env python3
from .word_generator import generate_random_words, gen_words_with_prefix_freq
from .ip_generator import IPConfig, IPGenerator, build_route_table, route_lookup, to_bits
from .url_generator import generate_urls

KINDS = ("words", "ips", "routes", "urls")


class WorkLoad:
    def __init__(self, seed=None):
        self.seed = seed

    def words(self, num_words, p_freq=0, unique=False):
        if p_freq > 0:
            return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
        else:
            return generate_random_words(num_words, self.seed, unique)

    def ips(self, num_ips):
        """IPv4 addresses as 32-character bit strings."""
        gen = IPGenerator(IPConfig(seed=self.seed))
        return [to_bits(ip) for ip in gen.batch(num_ips)]

    def routes(self, num_routes):
        """CIDR networks as bit strings of prefix length."""
        gen = IPGenerator(IPConfig(seed=self.seed))
        return [to_bits(net) for net in gen.routes(num_routes)]

    def route_table(self, num_routes, config=None):
        """Trie of generated routes, queried with route_lookup(table, address)."""
        gen = IPGenerator(IPConfig(seed=self.seed))
        return build_route_table(gen.routes(num_routes), config)

    def urls(self, num_urls):
        return generate_urls(num_urls, self.seed)

    def keys(self, kind, n, **kwargs):
        if kind not in KINDS:
            raise ValueError(f"Unknown workload kind {kind!r}, expected one of {KINDS}")
        return getattr(self, kind)(n, **kwargs)


__all__ = [
    "KINDS", "WorkLoad", "IPConfig", "IPGenerator", "to_bits", "build_route_table", "route_lookup",
    "generate_random_words", "gen_words_with_prefix_freq", "generate_urls",
]
