import asyncio
import unittest

from fastapi.testclient import TestClient

from cookie_session.main import app as fastapi_app, session_cache


def _cookie_value(resp, name="SID"):
    header = resp.headers["set-cookie"]
    pair = header.split(";")[0]
    key, _, value = pair.partition("=")
    assert key == name
    return value


class TestDemoApi(unittest.TestCase):
    def setUp(self):
        asyncio.run(session_cache.clear())

    def test_visit_counter_persists_across_requests(self):
        client = TestClient(fastapi_app)
        first = client.get("/")
        self.assertEqual(first.status_code, 200)
        self.assertIn("Visits this session: 1", first.text)
        sid = _cookie_value(first)

        second = client.get("/", headers={"Cookie": f"SID={sid}"})
        self.assertIn("Visits this session: 2", second.text)
        self.assertEqual(_cookie_value(second), sid)

    def test_peek_does_not_start_a_session(self):
        client = TestClient(fastapi_app)
        resp = client.get("/peek")
        self.assertIn("Visits this session: 0", resp.text)
        self.assertNotIn("set-cookie", resp.headers)
        self.assertEqual(len(session_cache), 0)

    def test_regenerate_rotates_id_and_keeps_data(self):
        sid = _cookie_value(TestClient(fastapi_app).get("/"))

        rotated = TestClient(fastapi_app).get("/regenerate", headers={"Cookie": f"SID={sid}"})
        new_sid = _cookie_value(rotated)
        self.assertNotEqual(new_sid, sid)
        self.assertEqual(len(session_cache), 1)

        after = TestClient(fastapi_app).get("/peek", headers={"Cookie": f"SID={new_sid}"})
        self.assertIn("Visits this session: 1", after.text)

        stale = TestClient(fastapi_app).get("/peek", headers={"Cookie": f"SID={sid}"})
        self.assertIn("Visits this session: 0", stale.text)

    def test_logout_destroys_session(self):
        sid = _cookie_value(TestClient(fastapi_app).get("/"))
        resp = TestClient(fastapi_app).get("/logout", headers={"Cookie": f"SID={sid}"})
        self.assertIn("Max-Age=0", resp.headers["set-cookie"])
        self.assertEqual(len(session_cache), 0)


if __name__ == "__main__":
    unittest.main()
