import time
import unittest
from unittest.mock import MagicMock, patch

from probe_service.chaos import ChaosController, hard_exit


class TestChaosController(unittest.TestCase):

    def test_exit_called_after_delay(self):
        exit_func = MagicMock()
        controller = ChaosController(delay_seconds=0.05, exit_func=exit_func)

        timer = controller.schedule_kill()
        exit_func.assert_not_called()

        timer.join(timeout=1)
        exit_func.assert_called_once_with(1)

    def test_timer_is_daemon(self):
        controller = ChaosController(delay_seconds=10, exit_func=MagicMock())
        timer = controller.schedule_kill()
        try:
            self.assertTrue(timer.daemon)
        finally:
            timer.cancel()

    def test_logs_warning(self):
        controller = ChaosController(delay_seconds=0.01, exit_func=MagicMock())
        with self.assertLogs("chaos", level="WARNING") as logs:
            controller.schedule_kill().join(timeout=1)
        self.assertIn("CHAOS", logs.output[0])

    @patch("probe_service.chaos.os._exit")
    @patch("probe_service.chaos.logging.shutdown")
    def test_hard_exit_flushes_logging_first(self, mock_shutdown, mock_exit):
        hard_exit(1)
        mock_shutdown.assert_called_once()
        mock_exit.assert_called_once_with(1)


class TestSystemStats(unittest.TestCase):

    def test_memory_status_threshold(self):
        from probe_service.system import MemoryStats, MEMORY_WARNING_BYTES

        self.assertEqual(MemoryStats(MEMORY_WARNING_BYTES - 1, 8 * 2**30).status, "ok")
        self.assertEqual(MemoryStats(MEMORY_WARNING_BYTES, 8 * 2**30).status, "warning")

    def test_memory_rounds_to_megabytes(self):
        from probe_service.system import MemoryStats

        stats = MemoryStats(used_bytes=int(41.6 * 2**20), total_bytes=2048 * 2**20)
        self.assertEqual(stats.used_mb, 42)
        self.assertEqual(stats.total_mb, 2048)

    def test_process_stats_reads_psutil(self):
        from probe_service.system import ProcessStats

        process = MagicMock()
        process.memory_info.return_value.rss = 100 * 2**20
        process.create_time.return_value = time.time() - 12
        stats = ProcessStats(process)

        self.assertEqual(stats.memory().used_mb, 100)
        self.assertGreaterEqual(stats.uptime_seconds(), 12)


if __name__ == "__main__":
    unittest.main()
