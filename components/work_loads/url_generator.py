import random
import string
import logging
from urllib.parse import quote

from faker import Faker

from .word_generator import load_vocabulary

logger = logging.getLogger(__name__)


### ================= URL Generation Probability Config ================= ###

# --- File extensions and their weights for path generation --- #
file_exts, file_ext_weights = zip(*[
  ("js", 0.28), ("css", 0.10), ("html", 0.03),
  ("png", 0.09), ("jpg", 0.10), ("svg", 0.02), ("webp", 0.03),
  ("woff2", 0.08), ("pdf", 0.03), ("json", 0.03), ("xml", 0.01),
  ("mp4", 0.03), ("mp3", 0.01),
])

# --- Path segment probability config --- #
slug_separators = ["-", "_", " "]
slug_separator_weights = [0.82, 0.12, 0.06]

sub_segments = [1, 2, 3, 4, 5]
sub_segment_weights = [0.40, 0.28, 0.18, 0.09, 0.05]

# Hosts are drawn from a small pool so that many URLs share a scheme+host prefix
DEFAULT_HOST_POOL = 200


### ================= URL Generation Functions ================= ###

def load_hosts(n=DEFAULT_HOST_POOL, seed=None, s=1.1):
  """Build n Faker domains, with Zipf weights so a few hosts dominate."""
  if n <= 0:
    raise ValueError("n must be positive")
  fake = Faker()
  if seed is not None:
    fake.seed_instance(seed)
  hosts = [fake.domain_name(levels=1 if i % 3 else 2) for i in range(n)]
  weights_zipf = [1 / ((r + 1) ** s) for r in range(n)]
  return hosts, weights_zipf


def pick_scheme(rng):
  """Pick a scheme (http or https) with a realistic probability."""
  return rng.choices(["http", "https"], weights=[0.12, 0.88], k=1)[0]


## ----- Path Generation Functions ----- ##

def slug(rng, min_len=2, max_len=12, digit_p=0.15, sep_p=0.15):
  pool = string.ascii_lowercase + (string.digits if rng.random() < digit_p else "")
  s = "".join(rng.choices(pool, k=rng.randint(min_len, max_len)))
  if rng.random() < sep_p and len(s) > 3:
    indx = rng.randint(2, len(s) - 2)
    separator = rng.choices(slug_separators, slug_separator_weights, k=1)[0]
    s = s[:indx] + separator + s[indx:]
  return quote(s, safe='-_.~')


def segment(rng, words, slug_p):
  """Generate a single path segment made of words and slugs."""
  num_segs = rng.choices(sub_segments, weights=sub_segment_weights, k=1)[0]
  for i in range(num_segs):
    if rng.random() < slug_p:
      yield slug(rng)
    else:
      yield quote(rng.choice(words), safe='-_.~')
    if i < num_segs - 1:
      yield rng.choices(slug_separators[:2], weights=slug_separator_weights[:2], k=1)[0]


def gen_path(rng, words, slug_p=0.3):
  """Generate a random path with a depth up to 5.
    slug_p: probability of a segment being a slug (vs. a vocabulary word)."""
  if slug_p < 0 or slug_p > 1:
    raise ValueError("slug_p must be between 0 and 1")

  depths, depth_weights = zip(*[
    (0, 0.20), (1, 0.30), (2, 0.25), (3, 0.13), (4, 0.10), (5, 0.02)
  ])
  depth = rng.choices(depths, weights=depth_weights, k=1)[0]
  if depth == 0:
    return "/"

  segs = []
  for _ in range(depth):
    segs.append("".join(segment(rng, words, slug_p)))
    slug_p += ((1 - slug_p) * 0.15)

  path = "/" + "/".join(segs)
  if rng.random() < 0.3:
    return path + '.' + rng.choices(file_exts, weights=file_ext_weights, k=1)[0]
  return path + '/'


## ----- Query String Generation Functions ----- ##

param_keys = ["q", "id", "page", "ref", "utm_source", "lang", "session", "token"]
param_weights = [0.20, 0.15, 0.15, 0.10, 0.10, 0.10, 0.12, 0.08]


def param_pair(rng, words, seen):
  """Generate a single key=value pair for a query string."""
  new_keys, new_weights = zip(*[duo for duo in zip(param_keys, param_weights) if duo[0] not in seen])
  key = rng.choices(new_keys, weights=new_weights, k=1)[0]
  seen.add(key)

  if key == 'q':  # words joined with + or percent-encoded spaces
    space_sym = "%20" if rng.random() < 0.2 else "+"
    val = space_sym.join(rng.choices(words, k=rng.randint(1, 6)))
  elif key == 'id':
    val = str(rng.randint(1, 10**7))
  elif key in ('ref', 'token', 'session'):  # hex tokens
    nbytes = rng.choice([8, 12, 16, 24, 32])
    val = format(rng.getrandbits(nbytes * 8), f"0{nbytes * 2}x")
  elif key == "page":
    val = str(rng.randint(1, 50))
  elif key == "lang":
    val = rng.choice(["en", "en-us", "es", "fr", "de", "pt-br", "ja", "zh-cn"])
  else:
    val = "+".join(rng.choices(words, k=rng.randint(1, 3)))
  return key + '=' + val


def query_string(rng, words):
  """Generate a random query string (or none) with a random number of parameters."""
  counts = [0, 1, 2, 3, 4, 5]
  count_weights = [0.40, 0.35, 0.12, 0.08, 0.03, 0.02]
  num_params = rng.choices(counts, weights=count_weights, k=1)[0]
  if num_params == 0:
    return ''
  seen = set()
  pairs = sorted(param_pair(rng, words, seen) for _ in range(num_params))
  return '?' + '&'.join(pairs)


### ================= Final URL Generation Logic ================= ###

def generate_urls(num_urls, seed=None, num_hosts=DEFAULT_HOST_POOL):
  """Generate a list of random URLs."""
  if num_urls < 1:
    raise ValueError("num_urls must be positive")
  rng = random.Random(seed)
  words = load_vocabulary()
  hosts, weights = load_hosts(num_hosts, seed)
  urls = []
  for _ in range(num_urls):
    scheme = pick_scheme(rng)
    host = rng.choices(hosts, weights=weights, k=1)[0]
    urls.append(f"{scheme}://{host}{gen_path(rng, words)}{query_string(rng, words)}")
  logger.debug("Generated %d urls over %d hosts", len(urls), num_hosts)
  return urls
