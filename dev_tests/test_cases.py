# test_cases.py
# Tests for the standard Trie: every public method, the mapping protocol,
# bulk operations and structural bookkeeping after deletes.

import random
import string
import unittest

from tries import KeyNotFound, Trie, TrieConfig


# ------------------------------------------------------------------------------
# Test data generators
# ------------------------------------------------------------------------------
def gen_words_fixed() -> list[str]:
    return [
        "app", "apple", "apply",
        "bat", "batch", "bath",
        "bar", "bark",
        "cat", "cater",
        "do", "dog", "dove",
    ]


def gen_random_words(n: int, alphabet: str = string.ascii_lowercase, min_len=3, max_len=10) -> list[str]:
    rng = random.Random(1337)
    out = []
    for _ in range(n):
        L = rng.randint(min_len, max_len)
        out.append("".join(rng.choice(alphabet) for _ in range(L)))
    return out


def trie_of(*keys) -> Trie:
    t = Trie()
    for k in keys:
        t.put(k, True)
    return t


# ------------------------------------------------------------------------------
# Construction & put/get
# ------------------------------------------------------------------------------
class TestCreationAndPutGet(unittest.TestCase):
    def test_new_trie_is_empty(self):
        t = Trie()
        self.assertEqual(t.size(), 0)
        self.assertTrue(t.is_empty())
        self.assertEqual(t.depth(), 0)
        self.assertEqual(t.keys(), [])

    def test_put_and_get(self):
        t = Trie()
        t.put("Key", "Value")
        self.assertTrue(t.contains("Key"))
        self.assertEqual(t.size(), 1)
        self.assertEqual(t.get("Key"), "Value")
        self.assertEqual(t.lookup("Key"), ("Value", True))

    def test_get_missing_key_raises_with_message(self):
        t = Trie()
        with self.assertRaises(KeyNotFound) as ctx:
            t.get("NonExistant")
        self.assertEqual(str(ctx.exception), "Key not found: NonExistant")
        self.assertEqual(ctx.exception.key, "NonExistant")
        self.assertIsInstance(ctx.exception, KeyError)

    def test_get_with_default(self):
        t = trie_of("abc")
        self.assertEqual(t.get("ab", "fallback"), "fallback")
        self.assertIsNone(t.get("zzz", None))

    def test_intermediate_node_is_not_a_key(self):
        t = trie_of("abc")
        self.assertFalse(t.contains("ab"))
        self.assertEqual(t.lookup("ab"), (None, False))
        self.assertFalse(t.contains("abcd"))

    def test_multiple_put_and_get_with_common_prefix(self):
        cases = [
            ("ABC", 1), ("ABCA", 2), ("ABCB", 3), ("ABCC", 4),
            ("ABCD", 5), ("ABCE", 6), ("ABCF", 7), ("ABCF", 7),
        ]
        t = Trie()
        for key, val in cases:
            t.put(key, val)

        # Re-inserting "ABCF" counts again
        self.assertEqual(t.size(), len(cases))
        for key, val in cases:
            self.assertEqual(t.get(key), val)
        self.assertEqual(t.depth(), 4)

    def test_distinct_counting_when_overwrites_not_counted(self):
        t = Trie(TrieConfig(count_overwrites=False))
        t.put("ABCF", 1)
        t.put("ABCF", 2)
        self.assertEqual(t.size(), 1)
        self.assertEqual(t.get("ABCF"), 2)
        t.delete("ABCF")
        self.assertEqual(t.size(), 0)
        self.assertTrue(t.is_empty())

    def test_falsy_values_are_stored(self):
        t = Trie()
        for key, val in [("none", None), ("zero", 0), ("empty", ""), ("false", False)]:
            t.put(key, val)
            self.assertTrue(t.contains(key), key)
            self.assertEqual(t.lookup(key), (val, True))

    def test_empty_string_key(self):
        t = Trie()
        t.put("", "root")
        self.assertTrue(t.contains(""))
        self.assertEqual(t.get(""), "root")
        self.assertEqual(t.size(), 1)
        self.assertEqual(t.depth(), 0)
        self.assertIn("", t.keys())
        self.assertTrue(t.delete(""))
        self.assertFalse(t.contains(""))

    def test_unicode_keys_compare_by_code_point(self):
        t = Trie()
        t.put("straße", 1)
        t.put("日本語", 2)
        self.assertEqual(t.get("日本語"), 2)
        self.assertFalse(t.contains("strasse"))
        self.assertFalse(t.contains("STRASSE"))
        self.assertEqual(t.depth(), 6)


# ------------------------------------------------------------------------------
# Mapping protocol
# ------------------------------------------------------------------------------
class TestMappingProtocol(unittest.TestCase):
    def test_dunder_methods(self):
        t = Trie()
        t["hola"] = 1
        t["hilo"] = 2
        self.assertEqual(len(t), 2)
        self.assertIn("hola", t)
        self.assertNotIn("ho", t)
        self.assertEqual(t["hilo"], 2)
        self.assertEqual(set(t), {"hola", "hilo"})
        del t["hola"]
        self.assertNotIn("hola", t)
        self.assertEqual(len(t), 1)

    def test_del_missing_raises(self):
        t = trie_of("abc")
        with self.assertRaises(KeyNotFound):
            del t["ab"]
        with self.assertRaises(KeyError):
            t["zzz"]

    def test_repr(self):
        t = trie_of("ab", "abcd")
        self.assertEqual(repr(t), "Trie(size=2, depth=4)")


# ------------------------------------------------------------------------------
# Prefix enumeration
# ------------------------------------------------------------------------------
class TestKeysWithPrefix(unittest.TestCase):
    def setUp(self):
        self.t = trie_of("A", "AB", "ABC", "ZZZZABC")

    def test_prefix_counts(self):
        cases = [("A", 3), ("AB", 2), ("ABC", 1), ("ABCD", 0), ("BCD", 0), ("Z", 1), ("", 4)]
        for prefix, count in cases:
            with self.subTest(prefix=prefix):
                self.assertEqual(len(self.t.keys_with_prefix(prefix)), count)

    def test_prefix_itself_included(self):
        self.assertEqual(sorted(self.t.keys_with_prefix("AB")), ["AB", "ABC"])

    def test_keys_returns_everything(self):
        self.assertEqual(sorted(self.t.keys()), ["A", "AB", "ABC", "ZZZZABC"])

    def test_empty_trie(self):
        self.assertEqual(Trie().keys_with_prefix(""), [])
        self.assertEqual(Trie().keys_with_prefix("A"), [])

    def test_limit(self):
        self.assertEqual(len(self.t.keys_with_prefix("", limit=2)), 2)
        self.assertEqual(self.t.keys_with_prefix("A", limit=0), [])

    def test_prefix_containment_property(self):
        words = gen_words_fixed()
        t = trie_of(*words)
        for prefix in ["", "a", "ap", "app", "ba", "bat", "c", "do", "x"]:
            with self.subTest(prefix=prefix):
                got = t.keys_with_prefix(prefix)
                self.assertTrue(all(k.startswith(prefix) for k in got))
                self.assertEqual(len(got), len(set(got)))
                self.assertEqual(set(got), {w for w in words if w.startswith(prefix)})

    def test_items(self):
        t = Trie()
        t.put("ab", 1)
        t.put("abc", 2)
        t.put("b", 3)
        self.assertEqual(sorted(t.items()), [("ab", 1), ("abc", 2), ("b", 3)])
        self.assertEqual(sorted(t.items("ab")), [("ab", 1), ("abc", 2)])


# ------------------------------------------------------------------------------
# Longest prefix
# ------------------------------------------------------------------------------
class TestLongestPrefix(unittest.TestCase):
    def test_longest_prefix(self):
        t = trie_of("A", "AB", "ABC", "ZZZZABC")
        cases = [
            ("A", "A"),
            ("AB", "AB"),
            ("ABC", "ABC"),
            ("ABCD", "ABC"),
            ("BCD", ""),
            ("ZZZZABD", "ZZZZAB"),
        ]
        for query, expected in cases:
            with self.subTest(query=query):
                self.assertEqual(t.longest_prefix(query), expected)

    def test_stops_on_structural_path_without_value(self):
        # "ZZ" holds no value but lies on the path of "ZZZZABC"
        t = trie_of("ZZZZABC")
        self.assertEqual(t.longest_prefix("ZZX"), "ZZ")

    def test_stops_at_first_mismatch(self):
        t = trie_of("AB")
        self.assertEqual(t.longest_prefix("AXB"), "A")

    def test_empty_trie_and_query(self):
        self.assertEqual(Trie().longest_prefix("ABC"), "")
        self.assertEqual(trie_of("A").longest_prefix(""), "")


class TestLongestKey(unittest.TestCase):
    def test_only_stored_keys_are_returned(self):
        t = trie_of("A", "ABC", "ZZZZABC")
        cases = [
            ("ABD", "A"),
            ("ABCD", "ABC"),
            ("ZZX", None),
            ("ZZZZABCQ", "ZZZZABC"),
            ("Q", None),
        ]
        for query, expected in cases:
            with self.subTest(query=query):
                self.assertEqual(t.longest_key(query), expected)
                if expected is not None:
                    self.assertTrue(t.contains(expected))

    def test_differs_from_longest_prefix_off_path(self):
        t = trie_of("A", "ABC")
        self.assertEqual(t.longest_prefix("ABD"), "AB")
        self.assertEqual(t.longest_key("ABD"), "A")

    def test_empty_key_and_empty_trie(self):
        self.assertIsNone(Trie().longest_key("ABC"))
        t = trie_of("", "xy")
        self.assertEqual(t.longest_key("q"), "")
        self.assertEqual(t.longest_key("xyz"), "xy")
        self.assertEqual(t.longest_key(""), "")


# ------------------------------------------------------------------------------
# Fuzzy matching
# ------------------------------------------------------------------------------
class TestFuzzyMatch(unittest.TestCase):
    def setUp(self):
        self.t = trie_of("A", "AB", "BC", "ABC", "CAC", "ZZZZABC")

    def test_fuzzy_counts(self):
        cases = [("..", 2), ("A.C", 1), ("...", 2), (".", 1), ("Z..ZABD", 0), ("Z..ZABC", 1), ("....ABC", 1), ("....", 0)]
        for pattern, count in cases:
            with self.subTest(pattern=pattern):
                self.assertEqual(len(self.t.keys_with_fuzzy_match(pattern)), count)

    def test_fuzzy_results(self):
        self.assertEqual(sorted(self.t.keys_with_fuzzy_match("..")), ["AB", "BC"])
        self.assertEqual(self.t.keys_with_fuzzy_match("A.C"), ["ABC"])
        self.assertEqual(self.t.keys_with_fuzzy_match("ABC"), ["ABC"])

    def test_length_constraint(self):
        for pattern in ["", ".", "..", "...", "....", "......."]:
            with self.subTest(pattern=pattern):
                self.assertTrue(all(len(k) == len(pattern) for k in self.t.keys_with_fuzzy_match(pattern)))

    def test_empty_trie(self):
        self.assertEqual(Trie().keys_with_fuzzy_match("..."), [])

    def test_custom_wildcard(self):
        t = Trie(TrieConfig(wildcard="?"))
        t.put("a.c", 1)
        t.put("abc", 2)
        self.assertEqual(sorted(t.keys_with_fuzzy_match("a?c")), ["a.c", "abc"])
        self.assertEqual(t.keys_with_fuzzy_match("a.c"), ["a.c"])
        self.assertEqual(sorted(self.t.keys_with_fuzzy_match("A*C", wildcard="*")), ["ABC"])


# ------------------------------------------------------------------------------
# Delete & pruning
# ------------------------------------------------------------------------------
class TestDelete(unittest.TestCase):
    def test_delete_prunes_and_updates_depth(self):
        t = trie_of("A", "AB", "ABC", "ABCD", "ABCDEFGH")
        self.assertEqual(t.depth(), 8)

        self.assertTrue(t.delete("ABCDEFGH"))
        self.assertEqual(t.depth(), 4)
        self.assertEqual(t.size(), 4)

        t.delete("ABC")
        for key in ["A", "AB", "ABCD"]:
            self.assertTrue(t.contains(key), key)
        self.assertFalse(t.contains("ABC"))
        self.assertEqual(t.depth(), 4)

        t.delete("ABCD")
        self.assertEqual(t.depth(), 2)
        self.assertEqual(t.node_count(), 3)

    def test_delete_missing_is_noop(self):
        t = trie_of("abc")
        before = t.node_count()
        self.assertFalse(t.delete("ab"))
        self.assertFalse(t.delete("abcd"))
        self.assertFalse(t.delete("zzz"))
        self.assertEqual(t.size(), 1)
        self.assertEqual(t.node_count(), before)
        self.assertFalse(Trie().delete("x"))

    def test_delete_keeps_siblings(self):
        words = gen_words_fixed()
        t = Trie()
        for i, w in enumerate(words):
            t.put(w, i)
        for victim in ["apply", "bath", "do"]:
            t.delete(victim)
            self.assertFalse(t.contains(victim))
        for i, w in enumerate(words):
            if w not in ("apply", "bath", "do"):
                self.assertEqual(t.get(w), i)

    def test_delete_everything_leaves_bare_root(self):
        words = gen_words_fixed()
        t = trie_of(*words)
        for w in words:
            t.delete(w)
        self.assertTrue(t.is_empty())
        self.assertEqual(t.depth(), 0)
        self.assertEqual(t.node_count(), 1)
        self.assertIsNone(t.root.children)

    def test_delete_then_reinsert(self):
        t = trie_of("abc")
        t.delete("abc")
        t.put("abd", 5)
        self.assertEqual(t.keys(), ["abd"])
        self.assertEqual(t.size(), 1)


# ------------------------------------------------------------------------------
# Bulk operations & structural stats
# ------------------------------------------------------------------------------
class TestBulkOperations(unittest.TestCase):
    def test_put_many_matches_single_puts(self):
        words = gen_random_words(500)
        single = Trie()
        for i, w in enumerate(words):
            single.put(w, i)
        bulk = Trie()
        applied = bulk.put_many((w, i) for i, w in enumerate(words))

        self.assertEqual(applied, len(words))
        self.assertEqual(bulk.size(), single.size())
        self.assertEqual(sorted(bulk.items()), sorted(single.items()))
        self.assertEqual(bulk.node_count(), single.node_count())

    def test_put_many_last_duplicate_wins(self):
        t = Trie()
        t.put_many([("b", 1), ("a", 1), ("b", 2)])
        self.assertEqual(t.get("b"), 2)
        self.assertEqual(t.size(), 3)

    def test_delete_many_counts(self):
        t = trie_of(*gen_words_fixed())
        deleted, missing = t.delete_many(["apply", "bath", "zzz"])
        self.assertEqual((deleted, missing), (2, 1))
        self.assertFalse(t.contains("apply"))
        self.assertFalse(t.contains("bath"))
        self.assertTrue(t.contains("apple"))
        self.assertTrue(t.contains("batch"))

    def test_delete_many_after_pruned_shared_prefix(self):
        # "abcx" prunes "c" and "x"; the next walk must not reuse them.
        t = trie_of("ab", "abcx", "abcy", "abd")
        deleted, missing = t.delete_many(["abcx", "abcy", "abd", "abe"])
        self.assertEqual((deleted, missing), (3, 1))
        self.assertEqual(t.keys(), ["ab"])
        self.assertEqual(t.depth(), 2)

    def test_delete_many_dedup(self):
        t = trie_of("ab", "abc")
        self.assertEqual(t.delete_many(["ab", "ab"], presorted=True), (1, 0))
        t = trie_of("ab", "abc")
        self.assertEqual(t.delete_many(["ab", "ab"], dedup=False, presorted=True), (1, 1))
        self.assertEqual(t.keys(), ["abc"])

    def test_delete_many_unsorted_input(self):
        t = trie_of("b", "ab", "abc", "c")
        self.assertEqual(t.delete_many(["c", "abc", "b"]), (3, 0))
        self.assertEqual(t.keys(), ["ab"])
        self.assertEqual(t.node_count(), 3)

    def test_large_random_roundtrip(self):
        words = gen_random_words(2000, min_len=4, max_len=9)
        t = Trie(TrieConfig(count_overwrites=False))
        t.put_many((w, w.upper()) for w in words + words[:200])
        unique = set(words)
        self.assertEqual(t.size(), len(unique))
        self.assertEqual(set(t.keys()), unique)

        to_delete = words[: len(words) // 2]
        deleted, _ = t.delete_many(to_delete)
        self.assertEqual(deleted, len(set(to_delete)))
        survivors = unique - set(to_delete)
        self.assertEqual(set(t.keys()), survivors)
        for w in survivors:
            self.assertEqual(t.get(w), w.upper())
        self.assertLessEqual(t.depth(), max(len(w) for w in survivors))

    def test_node_count_and_branch_factor(self):
        t = trie_of("a", "ab", "ac", "b")
        self.assertEqual(t.node_count(), 5)
        # root -> {a, b}, a -> {b, c}
        self.assertAlmostEqual(t.node_count(avg_branch_factor=True), 2.0)
        self.assertEqual(Trie().node_count(avg_branch_factor=True), 0.0)
        self.assertEqual(Trie().node_count(), 1)
        self.assertEqual(trie_of("abc").node_count(), 4)
        self.assertAlmostEqual(trie_of("abc").node_count(avg_branch_factor=True), 1.0)

    def test_deep_key_does_not_recurse(self):
        key = "x" * 5000
        t = trie_of(key)
        self.assertEqual(t.depth(), 5000)
        self.assertEqual(t.keys_with_prefix("xxx"), [key])
        self.assertEqual(t.keys_with_fuzzy_match("." * 5000), [key])
        self.assertTrue(t.delete(key))
        self.assertEqual(t.depth(), 0)


class TestTrieConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = TrieConfig()
        self.assertEqual(cfg.wildcard, ".")
        self.assertTrue(cfg.count_overwrites)

    def test_invalid_wildcard(self):
        for bad in ["", "..", None]:
            with self.subTest(bad=bad):
                with self.assertRaises(ValueError):
                    TrieConfig(wildcard=bad)

    def test_invalid_count_overwrites(self):
        with self.assertRaises(ValueError):
            TrieConfig(count_overwrites="yes")


if __name__ == "__main__":
    unittest.main(verbosity=2)
