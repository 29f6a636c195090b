import unittest

from cookie_session.session_store.memory import InMemorySessionCache


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


class TestInMemorySessionCache(unittest.IsolatedAsyncioTestCase):
    async def test_set_get_delete(self):
        cache = InMemorySessionCache()
        await cache.set("sess:a", '{"a": 1}', 10)
        self.assertEqual(await cache.get("sess:a"), '{"a": 1}')
        self.assertEqual(len(cache), 1)
        await cache.delete("sess:a")
        self.assertIsNone(await cache.get("sess:a"))
        # deleting again is fine
        await cache.delete("sess:a")

    async def test_entries_expire_after_ttl(self):
        clock = FakeClock()
        cache = InMemorySessionCache(clock=clock)
        await cache.set("k", "v", 5)
        clock.now = 104.0
        self.assertEqual(await cache.get("k"), "v")
        self.assertEqual(await cache.ttl("k"), 1.0)
        clock.now = 105.0
        self.assertIsNone(await cache.get("k"))

    async def test_set_refreshes_ttl(self):
        clock = FakeClock()
        cache = InMemorySessionCache(clock=clock)
        await cache.set("k", "v", 5)
        clock.now = 104.0
        await cache.set("k", "v", 5)
        clock.now = 108.0
        self.assertEqual(await cache.get("k"), "v")

    async def test_zero_ttl_never_expires(self):
        cache = InMemorySessionCache()
        await cache.set("k", "v", 0)
        self.assertIsNone(await cache.ttl("k"))
        self.assertEqual(await cache.get("k"), "v")

    async def test_clear(self):
        cache = InMemorySessionCache()
        await cache.set("a", "1", 10)
        await cache.set("b", "2", 10)
        await cache.clear()
        self.assertEqual(len(cache), 0)


if __name__ == "__main__":
    unittest.main()
