"""
tests/mersenne_core/ds/test_sharding.py
Enrutado determinista de claves a particiones.
"""
import unittest
from collections import Counter
from mersenne_core.ds.buckets import bucket_index, spread, top_bits
from mersenne_core.ds.sharding import shard_for, ShardRouter
from mersenne_core.hashing.constants import Family
from mersenne_core.hashing.digest import HasherBuilder, StatelessBuilder, hash_key
from mersenne_core.hashing.invariants import GOLDEN_64, MASK_64

SHARDS = 8
KEYS = 1000


class TestBuckets(unittest.TestCase):

    def test_spread_is_golden_product(self):
        self.assertEqual(spread(0), 0)
        self.assertEqual(spread(1), GOLDEN_64)
        self.assertEqual(spread(1 << 63), 1 << 63)  # GOLDEN_64 es impar

    def test_bucket_index_uses_high_bits(self):
        """Con n potencia de dos, la cubeta son los bits altos de spread(h)."""
        self.assertEqual(bucket_index(1, 8), GOLDEN_64 >> 61)
        self.assertEqual(bucket_index(MASK_64, 1), 0)
        for h in (0, 1, 1 << 40, MASK_64):
            self.assertEqual(bucket_index(h, 1 << 5), top_bits(h, 5))


class TestSharding(unittest.TestCase):

    def test_range(self):
        for partitions in (1, 2, 7, 16, 1000):
            for key in ("user:1", "user:2", 42, b"\x00\x01", ("tenant", 9)):
                self.assertTrue(0 <= shard_for(key, partitions) < partitions)

    def test_single_partition(self):
        self.assertEqual(shard_for("anything", 1), 0)

    def test_matches_key_hash(self):
        self.assertEqual(shard_for("user:77", 13), bucket_index(hash_key("user:77"), 13))

    def test_deterministic(self):
        self.assertEqual(shard_for(("orders", 2024), 32), shard_for(("orders", 2024), 32))

    def test_invalid_partitions(self):
        with self.assertRaises(ValueError):
            shard_for("k", 0)
        with self.assertRaises(ValueError):
            ShardRouter(-3)


# =========================================================================
# DISTRIBUCIÓN
# =========================================================================
class TestShardDistribution(unittest.TestCase):
    """Claves secuenciales: todas las particiones dentro de [1/2, 2] del reparto justo."""

    def assertBalanced(self, counts):
        fair = KEYS // SHARDS
        self.assertEqual(set(counts), set(range(SHARDS)), counts)
        for shard, n in counts.items():
            self.assertGreater(n, fair // 2, f"partición {shard}: {counts}")
            self.assertLess(n, fair * 2, f"partición {shard}: {counts}")

    def test_int_keys(self):
        self.assertBalanced(Counter(shard_for(i, SHARDS) for i in range(KEYS)))

    def test_string_keys(self):
        self.assertBalanced(Counter(shard_for(f"user:{i}", SHARDS) for i in range(KEYS)))

    def test_stateless_builder_reaches_every_shard(self):
        router = ShardRouter(SHARDS, StatelessBuilder())
        self.assertEqual(set(router.route_many(range(KEYS))), set(range(SHARDS)))


class TestShardRouter(unittest.TestCase):

    def test_router_agrees_with_function(self):
        router = ShardRouter(24)
        keys = [f"key-{i}" for i in range(50)]
        self.assertEqual(router.route_many(keys), [shard_for(k, 24) for k in keys])

    def test_custom_builder(self):
        builder = StatelessBuilder(Family.W64_M61)
        router = ShardRouter(10, builder)
        self.assertEqual(router.route("k"), bucket_index(builder.hash_one("k"), 10))
        self.assertEqual(shard_for("k", 10, builder), router.route("k"))

    def test_logs_setup(self):
        with self.assertLogs("mersenne_core.ds.sharding", level="DEBUG") as logs:
            ShardRouter(4, HasherBuilder(Family.W32_M31))
        self.assertIn("4 particiones", logs.output[0])
