import random
import math
import logging
from collections import defaultdict
from functools import lru_cache

from faker import Faker

logger = logging.getLogger(__name__)

VOCAB_DRAWS = 20_000


@lru_cache(maxsize=None)
def load_vocabulary(locale="en_US"):
  """Sorted, lower-cased, alphabetic words from Faker's lorem word list for `locale`.
  The list is drawn with a fixed seed, so it is the same on every call."""
  fake = Faker(locale)
  fake.seed_instance(0)
  words = {w.lower() for w in fake.words(nb=VOCAB_DRAWS)}
  vocab = sorted(w for w in words if w.isalpha())
  logger.debug("Loaded %d vocabulary words for %s", len(vocab), locale)
  return vocab


@lru_cache(maxsize=None)
def _prefix_buckets(locale="en_US"):
  ## Dictionary of words with identical first two letters
  ## This is to generate words with common prefixes
  bucket = defaultdict(list)
  for word in load_vocabulary(locale):
    bucket[word[:2]].append(word)
  prefixes = list(bucket.keys())
  weights = [len(bucket[p]) for p in prefixes]
  return bucket, prefixes, weights


def generate_random_words(num_words, seed=None, unique=False):
  """
  Return n random words from the vocabulary.
  - unique=False: sample with replacement (fast, allows duplicates)
  - unique=True: sample without replacement (requires n <= vocabulary size)
  """
  word_list = load_vocabulary()
  if num_words < 1 or (unique is True and num_words > len(word_list)):
    raise ValueError(f"num_words must be between 1 and {len(word_list)}")
  rng = random.Random(seed)
  if unique:
    return rng.sample(word_list, num_words)
  return rng.choices(word_list, k=num_words)


def _p_eff_log(x, max_mean=100) -> float:
  # Logarithmic mapping of prefix frequency to effective prefix frequency
  if x < 0 or x > 1:
    raise ValueError("Prefix frequency must be between 0 and 1")
  x = max(0.0, min(0.999999, x))
  k = math.log(max_mean)
  p = 1.0 - math.exp(-k * x)
  return min(p, 0.999999)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """Generates a list of words with a given prefix frequency.
  A higher prefix_freq means more consecutive words share a two-letter prefix,
  which is what makes shared trie paths (and LCP reuse in put_many) pay off.
  Prefix frequency is applied logarithmically
  prefix_freq: 0 -> 0.999...
  """
  prefix_freq = _p_eff_log(prefix_freq)
  bucket, prefixes, prefix_weights = _prefix_buckets()

  word_list = load_vocabulary()
  max_unique = int(len(word_list) // 1.1)
  if num_words < 1 or (unique is True and num_words > max_unique):
    raise ValueError(f"num_words must be between 1 and {max_unique}")
  rng = random.Random(seed)

  rand_words_list = []
  seen = set()
  exhausted = set()

  while len(rand_words_list) < num_words:
    prefix = rng.choices(prefixes, weights=prefix_weights)[0]
    options = bucket[prefix]
    sample_word = rng.choice(options)
    if unique:
      if prefix in exhausted or sample_word in seen:
        continue
      seen.add(sample_word)
    rand_words_list.append(sample_word)

    trigger = rng.random()
    while trigger < prefix_freq and len(rand_words_list) < num_words:
      new_word = rng.choice(options)
      if unique:
        remaining = [w for w in options if w not in seen]
        if not remaining:
          exhausted.add(prefix)
          break
        if new_word in seen:
          new_word = rng.choice(remaining)
        seen.add(new_word)
      rand_words_list.append(new_word)
      trigger = rng.random()
  return rand_words_list
