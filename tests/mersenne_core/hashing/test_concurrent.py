"""
tests/mersenne_core/hashing/test_concurrent.py
Hashers multi-hilo: SharedHasher (candado) y ThreadLocalHasher (por hilo).
"""
import unittest
import threading
import time
from mersenne_core.hashing.concurrent import SharedHasher, ThreadLocalHasher
from mersenne_core.hashing.constants import Family
from mersenne_core.hashing.stateful import StatefulHasher, StatefulHasher64

THREADS = 8
ROUNDS = 500
WORD = 0xDEADBEEFCAFEBABE


class OverlapDetector(StatefulHasher64):
    """Cuenta absorciones y detecta si dos hilos están dentro de absorb a la vez."""
    __slots__ = ('inside', 'overlaps', 'calls')

    def __init__(self, seed=0):
        super().__init__(seed)
        self.inside = False
        self.overlaps = 0
        self.calls = 0

    def absorb(self, word):
        if self.inside:
            self.overlaps += 1
        self.inside = True
        calls = self.calls
        time.sleep(0)  # Cede el GIL dentro de la sección crítica
        self.calls = calls + 1
        super().absorb(word)
        self.inside = False


class TestSharedHasher(unittest.TestCase):

    def test_absorb_is_mutually_exclusive(self):
        """Ningún hilo entra en absorb mientras otro está dentro; no se pierde ninguna absorción."""
        shared = SharedHasher(seed=0x1234)
        detector = OverlapDetector(0x1234)
        shared._hasher = detector
        barrier = threading.Barrier(THREADS)

        def worker():
            barrier.wait()
            for _ in range(ROUNDS):
                shared.absorb(WORD)

        threads = [threading.Thread(target=worker) for _ in range(THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(detector.overlaps, 0)
        self.assertEqual(detector.calls, THREADS * ROUNDS)

    def test_absorb_all_is_atomic_block(self):
        shared = SharedHasher(Family.W32_M31, seed=9)
        value = shared.absorb_all([1, 2, 0x100])
        reference = StatefulHasher.for_family(Family.W32_M31, 9)
        reference.absorb_all([1, 2, 0x100])
        self.assertEqual(value, reference.current_value())

    def test_snapshot_and_reset(self):
        shared = SharedHasher(seed=3)
        shared.absorb(0xFFFF << 16)
        snap = shared.snapshot()
        shared.absorb(0xABCDEF << 30)
        self.assertNotEqual(snap.current_value(), shared.current_value())
        shared.reset()
        self.assertEqual(shared.current_value(), 3)


class TestThreadLocalHasher(unittest.TestCase):

    def test_threads_are_independent(self):
        """Cada hilo parte de la semilla y obtiene el mismo resultado para la misma secuencia."""
        local = ThreadLocalHasher(seed=0)
        results = []
        lock = threading.Lock()

        def worker():
            value = local.absorb_all([0x100, 0x1])
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(results, [3] * THREADS)
        # El hilo principal no ha absorbido nada
        self.assertEqual(local.current_value(), 0)

    def test_reset_is_per_thread(self):
        local = ThreadLocalHasher(Family.W32_M31, seed=11)
        local.absorb(0xFFFFFFFF)
        local.reset()
        self.assertEqual(local.current_value(), 11)
        reference = StatefulHasher.for_family(Family.W32_M31, 11)
        reference.absorb(0x100)
        self.assertEqual(local.absorb(0x100), reference.current_value())
