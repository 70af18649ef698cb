import asyncio
import unittest
from unittest.mock import AsyncMock

from site_intel_internal.sources.gather import SourceSpec, fetch_with_retry, gather_sources


def spec(name, fetch, **kwargs):
    kwargs.setdefault("backoff_base_seconds", 0.0)
    return SourceSpec(name=name, fetch=fetch, **kwargs)


class TestSourceSpec(unittest.TestCase):
    def test_backoff_delays(self):
        source = SourceSpec(name="fema", fetch=AsyncMock())
        self.assertAlmostEqual(source.backoff_delay(0), 0.1)
        self.assertAlmostEqual(source.backoff_delay(1), 0.25)
        self.assertAlmostEqual(source.backoff_delay(2), 0.625)

    def test_label_defaults_to_name(self):
        self.assertEqual(SourceSpec(name="fema", fetch=AsyncMock()).display_label, "fema")
        self.assertEqual(SourceSpec(name="fema", fetch=AsyncMock(), label="FEMA flood data").display_label, "FEMA flood data")

    def test_rejects_bad_settings(self):
        with self.assertRaises(ValueError):
            SourceSpec(name="x", fetch=AsyncMock(), max_retries=0)
        with self.assertRaises(ValueError):
            SourceSpec(name="x", fetch=AsyncMock(), timeout_seconds=0)


class TestFetchWithRetry(unittest.TestCase):
    def test_success_first_try(self):
        fetch = AsyncMock(return_value={"floodZone": "AE"})
        succeeded, value, error = asyncio.run(fetch_with_retry(spec("fema", fetch)))
        self.assertTrue(succeeded)
        self.assertEqual(value, {"floodZone": "AE"})
        self.assertIsNone(error)
        self.assertEqual(fetch.await_count, 1)

    def test_retries_then_succeeds(self):
        fetch = AsyncMock(side_effect=[RuntimeError("Request failed 503"), "ok"])
        succeeded, value, _ = asyncio.run(fetch_with_retry(spec("usgs", fetch)))
        self.assertTrue(succeeded)
        self.assertEqual(value, "ok")
        self.assertEqual(fetch.await_count, 2)

    def test_exhausted_retries_use_fallback(self):
        fetch = AsyncMock(side_effect=RuntimeError("Request failed 500"))
        succeeded, value, error = asyncio.run(fetch_with_retry(spec("soils", fetch, max_retries=3, fallback={})))
        self.assertFalse(succeeded)
        self.assertEqual(value, {})
        self.assertEqual(error, "Request failed 500")
        self.assertEqual(fetch.await_count, 3)

    def test_timeout_counts_as_failure(self):
        async def slow():
            await asyncio.sleep(1)
            return "late"

        succeeded, value, error = asyncio.run(
            fetch_with_retry(spec("elevation", slow, timeout_seconds=0.01, max_retries=2))
        )
        self.assertFalse(succeeded)
        self.assertIsNone(value)
        self.assertEqual(error, "timed out")


class TestGatherSources(unittest.TestCase):
    def test_one_failure_does_not_abort(self):
        specs = [
            spec("fema", AsyncMock(return_value={"floodZone": "X"})),
            spec("usgs", AsyncMock(side_effect=RuntimeError("Request failed 502")), label="USGS design maps", max_retries=2),
            spec("fire", AsyncMock(return_value={"wildfireRisk": "low"})),
        ]
        result = asyncio.run(gather_sources(specs))
        self.assertEqual(result.values["fema"], {"floodZone": "X"})
        self.assertIsNone(result.values["usgs"])
        self.assertEqual(result.values["fire"], {"wildfireRisk": "low"})
        self.assertEqual(result.failed_sources, ["usgs"])
        self.assertEqual(result.warnings, ["USGS design maps unavailable: Request failed 502"])

    def test_sources_run_concurrently(self):
        started = []

        def make_fetch(name):
            async def fetch():
                started.append(name)
                await asyncio.sleep(0.05)
                return name
            return fetch

        async def run():
            loop = asyncio.get_running_loop()
            begin = loop.time()
            result = await gather_sources([spec(n, make_fetch(n)) for n in ("a", "b", "c", "d")])
            return result, loop.time() - begin

        result, elapsed = asyncio.run(run())
        self.assertEqual(result.values, {"a": "a", "b": "b", "c": "c", "d": "d"})
        self.assertEqual(result.warnings, [])
        self.assertLess(elapsed, 0.15)

    def test_duplicate_names_rejected(self):
        with self.assertRaises(ValueError):
            asyncio.run(gather_sources([spec("a", AsyncMock()), spec("a", AsyncMock())]))

    def test_empty(self):
        result = asyncio.run(gather_sources([]))
        self.assertEqual(result.values, {})
        self.assertEqual(result.warnings, [])


if __name__ == "__main__":
    unittest.main()
