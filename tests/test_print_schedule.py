import contextlib
import importlib.util
import io
import os
import unittest
from unittest.mock import patch

SCRIPT = os.path.join(os.path.dirname(__file__), '..', 'scripts', 'print_schedule.py')


def _load_script():
    spec = importlib.util.spec_from_file_location('print_schedule', SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class PrintScheduleTests(unittest.TestCase):
    def setUp(self):
        self.script = _load_script()

    def _run(self, *argv):
        out = io.StringIO()
        with patch('sys.argv', ['print_schedule.py', *argv]), contextlib.redirect_stdout(out):
            self.script.main()
        return out.getvalue()

    def test_prints_periods(self):
        text = self._run('2024-01-01', '--periods', '2')
        self.assertIn('Contract start: 2024-01-01', text)
        self.assertIn('First period end: 2024-01-04', text)
        self.assertIn('Period 1: 2024-01-01 - 2024-01-04 (4 days)', text)
        self.assertIn('Period 2: 2024-01-05 - 2024-01-18 (14 days)', text)
        self.assertNotIn('Adjusted payment', text)

    def test_adjust_shows_moved_payment_dates(self):
        # Fri Dec 26 2025 is Boxing Day
        text = self._run('2025-12-22', '--periods', '1', '--adjust')
        self.assertIn('Payment: 2025-12-26', text)
        self.assertIn('Adjusted payment: 2025-12-29', text)

    def test_invalid_input_exits(self):
        with self.assertRaises(SystemExit) as ctx:
            self._run('2024-02-30')
        self.assertIn('error:', str(ctx.exception.code))
        with self.assertRaises(SystemExit):
            self._run('2024-01-01', '--periods', '0')


if __name__ == '__main__':
    unittest.main()
