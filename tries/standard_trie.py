"""
Standard Trie (character-per-edge) mapping string keys to arbitrary values.

This module provides an associative prefix tree with exact lookup, prefix
enumeration, longest-prefix matching, single-character wildcard matching and
deletion with pruning of dead branches.
Key design choices:
- **Memory efficiency:** `TrieNode` uses `__slots__` and *lazy* child dicts (`children=None`
  until the first child is added, and back to `None` once the last child is pruned).
- **Absent marker:** A node with no key ending at it holds the private `_ABSENT`
  sentinel, so `None`, `0`, `""` and `False` are ordinary storable values.
- **Batch performance:** `put_many` and `delete_many` both exploit the Longest
  Common Prefix (LCP) between *adjacent, sorted* inputs to minimize retraversal.
- **Iterative traversals:** All traversals are iterative (no recursion), avoiding
  Python recursion limits on very long keys.


Classes
-------
KeyNotFound
    `KeyError` subclass raised by `get` / `[]` / `del` for a key without a value.
TrieNode
    Minimal node holding `children` (dict[str, TrieNode] or None) and `value`.
Trie
    Public API for put, get, delete, prefix enumeration, fuzzy matching and
    structural stats.


Complexity (typical)
--------------------
- put / get / contains / delete: O(L)
- longest_prefix / longest_key: O(L) where L = len(query)
- keys_with_prefix: O(L + total characters below the prefix node)
- keys_with_fuzzy_match: O(nodes at depth <= len(pattern) reachable by the pattern)
- depth / node_count: O(#nodes)


Conventions & Notes
-------------------
- **Keys:** Characters are compared by code point; no case folding or Unicode
  normalization happens anywhere.
- **Size:** By default every `put` increments the size, including one that
  overwrites an existing key. Pass `TrieConfig(count_overwrites=False)` to count
  distinct keys instead. `delete` only decrements when a value was removed.
- **Enumeration order:** Follows child insertion order. It is not part of the
  contract; sort in the caller if order matters.
- **Longest prefix:** Walks existing edges, not value-bearing nodes, so the
  result can end on a node that holds no value when a longer key shares the path.
  `longest_key` is the value-gated variant.
- **Empty string:** `""` is a valid key; `root.value` represents it.
- **Threads:** Nothing here is synchronized. Guard a shared trie with one lock.
"""

import logging
from operator import itemgetter

from .config import TrieConfig

logger = logging.getLogger(__name__)

_ABSENT = object()


def _common_prefix_length(a, b):
  i = 0
  limit = min(len(a), len(b))
  while i < limit and a[i] == b[i]:
    i += 1
  return i


class KeyNotFound(KeyError):
  """Raised when the queried key has no value stored in the trie."""

  def __init__(self, key):
    super().__init__(key)
    self.key = key

  def __str__(self):
    return f"Key not found: {self.key}"


class TrieNode:
  __slots__ = ("children", "value")

  def __init__(self):
    self.children = None
    self.value = _ABSENT


class Trie:
  __slots__ = ("root", "config", "_size")

  def __init__(self, config=None):
    self.root = TrieNode()
    self.config = config if config is not None else TrieConfig()
    self._size = 0

  def __repr__(self):
    return f"Trie(size={self._size}, depth={self.depth()})"

  def __len__(self):
    return self._size

  def __contains__(self, key):
    return self.contains(key)

  def __iter__(self):
    return iter(self.keys())

  def __getitem__(self, key):
    return self.get(key)

  def __setitem__(self, key, value):
    self.put(key, value)

  def __delitem__(self, key):
    if not self.delete(key):
      raise KeyNotFound(key)

  # -- introspection ----------------------------------------------------------

  def size(self):
    """Number of stored keys, maintained incrementally (see `TrieConfig.count_overwrites`)."""
    return self._size

  def is_empty(self):
    return self._size == 0

  def depth(self):
    """Return the height of the node tree.

    The height is the length of the longest root-to-node path over existing
    nodes, i.e. `1 + max(depth(child))`, and 0 for an empty trie. Because dead
    branches are pruned on delete, this equals the length of the longest key
    still stored.

    Complexity
    ----------
    O(#nodes) time, O(#nodes) extra space in the worst case.
    """
    deepest = 0
    stack = [(self.root, 0)]
    while stack:
      node, level = stack.pop()
      if level > deepest:
        deepest = level
      if node.children:
        for child in node.children.values():
          stack.append((child, level + 1))
    return deepest

  def _iter_nodes(self):
    stack = [self.root]
    while stack:
      node = stack.pop()
      yield node
      if node.children:
        stack.extend(node.children.values())

  def node_count(self, avg_branch_factor=False):
    """Number of nodes, root included.

    With `avg_branch_factor=True`, return instead the mean number of children
    over nodes that have any (0.0 for a bare root).
    """
    # every non-root node is exactly one child entry
    degrees = [len(n.children) for n in self._iter_nodes() if n.children]
    if avg_branch_factor:
      return sum(degrees) / len(degrees) if degrees else 0.0
    return 1 + sum(degrees)

  # -- insertion --------------------------------------------------------------

  def _assign(self, node, value):
    if self.config.count_overwrites or node.value is _ABSENT:
      self._size += 1
    node.value = value

  def put(self, key, value):
    """Store `value` under `key`, creating one node per missing character.

    Parameters
    ----------
    key : str
        Key to insert. The empty string stores the value on the root.
    value : Any
        Payload; held by reference and never inspected.

    Notes
    -----
    - Lazily creates the `children` dict only when a node gets its first child.
    - Replacing an existing value still increments the size unless
      `config.count_overwrites` is False.

    Complexity
    ----------
    O(L) time, O(new_nodes) space where L = len(key).
    """
    node = self.root

    for ch in key:
      children = node.children
      nxt = None if children is None else children.get(ch)
      if nxt is None:
        nxt = TrieNode()
        if children is None:
          node.children = {ch: nxt}
        else:
          children[ch] = nxt
      node = nxt
    self._assign(node, value)

  def put_many(self, items, *, presorted=False):
    """Bulk-insert `(key, value)` pairs using LCP reuse.

    Parameters
    ----------
    items : Iterable[tuple[str, Any]]
        Pairs to insert. When a key repeats, the last pair wins.
    presorted : bool, default=False
        If True, `items` is already sorted by key and is applied in the given order.

    Returns
    -------
    int
        Number of pairs applied. Size accounting matches calling `put` per pair.

    Notes
    -----
    Iterates pairs in key order and restarts each walk from the deepest node
    shared with the previous key instead of from the root.
    """
    items = list(items) if presorted else sorted(items, key=itemgetter(0))

    prev = ""
    path = [self.root]

    for key, value in items:
      i = _common_prefix_length(prev, key)
      del path[i + 1:]
      node = path[-1]

      for ch in key[i:]:
        children = node.children
        nxt = None if children is None else children.get(ch)

        if nxt is None:
          nxt = TrieNode()
          if children is None:
            node.children = {ch: nxt}
          else:
            children[ch] = nxt

        path.append(nxt)
        node = nxt

      self._assign(node, value)
      prev = key

    logger.debug("put_many applied %d items, size=%d", len(items), self._size)
    return len(items)

  # -- lookup -----------------------------------------------------------------

  def prefix_search(self, prefix):
    """Return the node at the end of `prefix`, or None if the path is missing.

    The node may or may not hold a value.
    """
    node = self.root
    for ch in prefix:
      node = None if node.children is None else node.children.get(ch)
      if node is None:
        return None
    return node

  def lookup(self, key):
    """Return `(value, found)`; `(None, False)` when `key` holds no value."""
    node = self.prefix_search(key)
    if node is None or node.value is _ABSENT:
      return None, False
    return node.value, True

  def get(self, key, default=_ABSENT):
    """Return the value stored under `key`.

    Raises
    ------
    KeyNotFound
        If `key` holds no value and no `default` was given.
    """
    node = self.prefix_search(key)
    if node is None or node.value is _ABSENT:
      if default is _ABSENT:
        raise KeyNotFound(key)
      return default
    return node.value

  def contains(self, key):
    return self.lookup(key)[1]

  # -- enumeration ------------------------------------------------------------

  def _iter_items(self, prefix):
    """Yield `(key, value)` pairs below `prefix` using an iterative DFS.

    A shared character buffer is truncated back to the frame depth before each
    child is appended, so strings are only built for value-bearing nodes.
    """
    node = self.prefix_search(prefix)
    if node is None:
      return

    buf = list(prefix)
    if node.value is not _ABSENT:
      yield "".join(buf), node.value

    stack = [(node, iter(node.children or ()), len(buf))]
    while stack:
      n, it, depth = stack[-1]
      ch = next(it, None)
      if ch is None:
        stack.pop()
        continue
      del buf[depth:]
      buf.append(ch)
      child = n.children[ch]
      if child.value is not _ABSENT:
        yield "".join(buf), child.value
      stack.append((child, iter(child.children or ()), depth + 1))

  def keys_with_prefix(self, prefix, limit=None):
    """Return the keys that start with `prefix`.

    Parameters
    ----------
    prefix : str
        The prefix to enumerate from. Use "" to export every key. The prefix
        itself is included when it is a stored key.
    limit : int | None, default=None
        If None, return all matches; otherwise, return up to `limit` matches.

    Returns
    -------
    list[str]
        Matching keys in unspecified order; empty when no key has the prefix.
    """
    keys = []
    for key, _ in self._iter_items(prefix):
      if limit is not None and len(keys) >= limit:
        break
      keys.append(key)
    return keys

  def keys(self):
    return self.keys_with_prefix("")

  def items(self, prefix=""):
    return list(self._iter_items(prefix))

  def longest_prefix(self, query):
    """Return the longest initial segment of `query` that is a path in the trie.

    The walk follows existing edges from the root and stops at the first
    character without a matching child. It does not require a value at the
    node where it stops. Returns "" when not even the first character matches.
    """
    node = self.root
    length = 0
    for ch in query:
      nxt = None if node.children is None else node.children.get(ch)
      if nxt is None:
        break
      node = nxt
      length += 1
    return query[:length]

  def longest_key(self, query):
    """Return the longest stored key that is a prefix of `query`, or None.

    Same walk as `longest_prefix`, but only nodes holding a value are
    remembered, so the result is always a key `get` can resolve. This is the
    lookup a routing table needs.
    """
    node = self.root
    best = 0 if node.value is not _ABSENT else None
    for i, ch in enumerate(query, 1):
      node = None if node.children is None else node.children.get(ch)
      if node is None:
        break
      if node.value is not _ABSENT:
        best = i
    return None if best is None else query[:best]

  def keys_with_fuzzy_match(self, pattern, wildcard=None):
    """Return the keys matching `pattern`, where the wildcard matches any one character.

    Parameters
    ----------
    pattern : str
        Literal characters must match exactly; each wildcard matches exactly one
        character. Only keys of length `len(pattern)` can match.
    wildcard : str | None, default=None
        Overrides `config.wildcard` (default ".") for this call.

    Returns
    -------
    list[str]
        Matching keys in unspecified order.
    """
    if wildcard is None:
      wildcard = self.config.wildcard
    target = len(pattern)

    matches = []
    stack = [(self.root, "")]
    while stack:
      node, acc = stack.pop()
      pos = len(acc)
      if pos == target:
        if node.value is not _ABSENT:
          matches.append(acc)
        continue

      children = node.children
      if not children:
        continue
      ch = pattern[pos]
      if ch == wildcard:
        for label, child in children.items():
          stack.append((child, acc + label))
      else:
        child = children.get(ch)
        if child is not None:
          stack.append((child, acc + ch))
    return matches

  # -- deletion ---------------------------------------------------------------

  @staticmethod
  def _batch_keys(keys, dedup=True, presorted=False):
    """Keys in walk order: sorted, unless `presorted` says they already are.

    `dedup` drops repeats (first occurrence kept) before ordering.
    """
    if dedup:
      keys = dict.fromkeys(keys)
    return list(keys) if presorted else sorted(keys)

  def delete(self, key):
    """Remove `key` and prune the branch it leaves behind.

    Deleting a key that holds no value is a silent no-op.

    Returns
    -------
    bool
        True if a value was removed.
    """
    deleted, _ = self.delete_many([key], dedup=False, presorted=True)
    return deleted == 1

  def delete_many(self, keys, *, dedup=True, presorted=False):
    """Bulk-delete many keys with pruning.

    Strategy
    --------
    - Prepare inputs (sort/dedup).
    - Iterate keys in sorted order and reuse the LCP with the previous key to
      minimize descent work. The reused path never extends past the nodes that
      the previous walk reached and that survived pruning.
    - For each present key, clear its value and prune upward while nodes hold
      no value and have no children.

    Returns
    -------
    tuple[int, int]
        (deleted_count, missing_count)
    """
    keys = self._batch_keys(keys, dedup, presorted)

    prev = ""
    path_nodes = [self.root]
    path_edges = [""]

    deleted = 0
    missing = 0

    for key in keys:
      i = min(_common_prefix_length(prev, key), len(path_nodes) - 1)
      del path_nodes[i + 1:]
      del path_edges[i + 1:]
      prev = key

      node = path_nodes[-1]
      found = True
      for ch in key[i:]:
        children = node.children
        if children is None or ch not in children:
          found = False
          break
        node = children[ch]
        path_nodes.append(node)
        path_edges.append(ch)

      if not found or node.value is _ABSENT:
        missing += 1
        continue

      node.value = _ABSENT
      self._size -= 1
      deleted += 1

      idx = len(path_nodes) - 1
      while idx > 0:
        cur = path_nodes[idx]
        if cur.value is not _ABSENT or cur.children:
          break
        parent = path_nodes[idx - 1]
        del parent.children[path_edges[idx]]
        if not parent.children:
          parent.children = None
        idx -= 1
      del path_nodes[idx + 1:]
      del path_edges[idx + 1:]

    if len(keys) > 1:
      logger.debug("delete_many removed %d keys, %d missing", deleted, missing)
    return deleted, missing
