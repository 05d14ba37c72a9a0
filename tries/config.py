from dataclasses import dataclass


@dataclass
class TrieConfig:
    """
    Configuration for Trie
        wildcard: str, single character that matches any one character in fuzzy patterns
        count_overwrites: bool, if True every put() counts toward size, even one that
            replaces an existing value; if False size counts distinct keys only
    """
    wildcard: str = "."
    count_overwrites: bool = True

    def __post_init__(self):
        if not isinstance(self.wildcard, str) or len(self.wildcard) != 1:
            raise ValueError(f"wildcard must be a single character, got {self.wildcard!r}")
        if not isinstance(self.count_overwrites, bool):
            raise ValueError("count_overwrites must be a bool")
