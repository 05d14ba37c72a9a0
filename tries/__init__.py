from .config import TrieConfig
from .standard_trie import KeyNotFound, Trie, TrieNode

__all__ = ["KeyNotFound", "Trie", "TrieConfig", "TrieNode"]
