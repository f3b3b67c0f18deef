"""Tests for probe_common.observability.metrics submodule."""

import unittest

from prometheus_client import CollectorRegistry

from probe_common.observability.metrics import (
    create_counter,
    create_gauge,
    create_histogram,
    create_info,
    create_service_info,
    metrics_response,
    register_default_collectors,
)


class TestMetricFactories(unittest.TestCase):
    """Verify create_* functions and idempotent registration."""

    def setUp(self):
        self.registry = CollectorRegistry()

    def test_create_counter_basic(self):
        c = create_counter(self.registry, "test_counter_basic", "A test counter")
        c.inc()
        self.assertEqual(self.registry.get_sample_value("test_counter_basic_total"), 1.0)

    def test_create_counter_idempotent(self):
        c1 = create_counter(self.registry, "test_counter_idem", "counter")
        c2 = create_counter(self.registry, "test_counter_idem", "counter")
        self.assertIs(c1, c2)

    def test_counters_in_separate_registries_are_independent(self):
        other = CollectorRegistry()
        c1 = create_counter(self.registry, "test_counter_sep", "counter")
        c2 = create_counter(other, "test_counter_sep", "counter")
        self.assertIsNot(c1, c2)
        c1.inc()
        self.assertEqual(other.get_sample_value("test_counter_sep_total"), 0.0)

    def test_create_histogram_with_buckets(self):
        h = create_histogram(
            self.registry, "test_hist_buckets", "A test histogram", buckets=[0.1, 0.5, 1.0]
        )
        h.observe(0.3)
        self.assertEqual(tuple(h._upper_bounds), (0.1, 0.5, 1.0, float("inf")))
        self.assertEqual(
            self.registry.get_sample_value("test_hist_buckets_bucket", {"le": "0.5"}), 1.0
        )

    def test_create_histogram_with_labels(self):
        h = create_histogram(
            self.registry, "test_hist_labels", "hist", labelnames=["method", "path"]
        )
        h.labels(method="GET", path="/x").observe(0.2)
        self.assertEqual(
            self.registry.get_sample_value(
                "test_hist_labels_count", {"method": "GET", "path": "/x"}
            ),
            1.0,
        )

    def test_create_histogram_idempotent(self):
        h1 = create_histogram(self.registry, "test_hist_idem", "hist")
        h2 = create_histogram(self.registry, "test_hist_idem", "hist")
        self.assertIs(h1, h2)

    def test_create_info(self):
        info = create_info(self.registry, "test_info_metric", "info")
        info.info({"version": "1.0"})
        self.assertEqual(
            self.registry.get_sample_value("test_info_metric_info", {"version": "1.0"}), 1.0
        )

    def test_create_gauge(self):
        g = create_gauge(self.registry, "test_gauge_basic", "A test gauge")
        g.set(42)
        self.assertEqual(self.registry.get_sample_value("test_gauge_basic"), 42.0)


class TestCreateServiceInfo(unittest.TestCase):
    """Verify the create_service_info convenience helper."""

    def test_creates_and_populates(self):
        registry = CollectorRegistry()
        info = create_service_info(registry, "test_svc", "1.2.3", "staging")
        samples = list(info.collect()[0].samples)
        sample_dict = {s.labels.get("version"): s for s in samples if "version" in s.labels}
        self.assertIn("1.2.3", sample_dict)
        self.assertEqual(sample_dict["1.2.3"].labels["environment"], "staging")


class TestDefaultCollectors(unittest.TestCase):

    def test_registers_gc_and_platform(self):
        registry = CollectorRegistry()
        register_default_collectors(registry)
        body, _ = metrics_response(registry)
        self.assertIn(b"python_info", body)
        self.assertIn(b"python_gc_objects_collected_total", body)


class TestMetricsResponse(unittest.TestCase):
    """Verify the metrics_response helper."""

    def test_returns_bytes_and_content_type(self):
        registry = CollectorRegistry()
        create_counter(registry, "test_response_total", "counter").inc()
        body, content_type = metrics_response(registry)
        self.assertIsInstance(body, bytes)
        self.assertIn("text/plain", content_type)
        self.assertIn(b"test_response_total 1.0", body)


if __name__ == "__main__":
    unittest.main()
