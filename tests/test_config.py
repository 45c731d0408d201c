"""
Test suite for parser configuration, tracing and logging setup.
"""

import unittest
import sys
import os
import io
import json
import logging

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from amp.config import ParserConfiguration, DEFAULT_MAX_NESTING_DEPTH
from amp.logging_config import setup_logging, JSONFormatter
from amp.parser import parse


class TestParserConfiguration(unittest.TestCase):
    """Test cases for ParserConfiguration."""

    def test_defaults(self):
        config = ParserConfiguration()

        self.assertEqual(config.max_nesting_depth, DEFAULT_MAX_NESTING_DEPTH)
        self.assertEqual(config.max_nesting_depth, 64)
        self.assertIsNone(config.trace)
        self.assertFalse(config.debug_mode)
        self.assertFalse(config.tracing)

    def test_depth_must_be_positive(self):
        with self.assertRaises(ValueError):
            ParserConfiguration(max_nesting_depth=0)

    def test_from_env_defaults(self):
        config = ParserConfiguration.from_env({})
        self.assertEqual(config, ParserConfiguration())

    def test_from_env_values(self):
        config = ParserConfiguration.from_env({
            "AMP_MAX_NESTING_DEPTH": "10",
            "AMP_DEBUG": "Yes",
        })

        self.assertEqual(config.max_nesting_depth, 10)
        self.assertTrue(config.debug_mode)
        self.assertTrue(config.tracing)

    def test_from_env_false_debug(self):
        self.assertFalse(ParserConfiguration.from_env({"AMP_DEBUG": "0"}).debug_mode)

    def test_from_env_bad_depth(self):
        with self.assertRaises(ValueError) as ctx:
            ParserConfiguration.from_env({"AMP_MAX_NESTING_DEPTH": "deep"})
        self.assertIn("AMP_MAX_NESTING_DEPTH", str(ctx.exception))


class TestTracing(unittest.TestCase):
    """Test cases for the trace sink and debug logging."""

    def test_trace_sink_receives_steps(self):
        lines = []
        parse("1 + 2 * 3;", ParserConfiguration(trace=lines.append))

        self.assertTrue(lines)
        self.assertTrue(any(line.startswith("advance") for line in lines))
        self.assertTrue(any("fold *" in line for line in lines))

    def test_trace_sink_without_debug_logging(self):
        lines = []
        config = ParserConfiguration(trace=lines.append)
        parse("x;", config)

        self.assertTrue(config.tracing)
        self.assertFalse(config.debug_mode)
        self.assertTrue(any("statement at" in line for line in lines))

    def test_debug_mode_logs_steps(self):
        with self.assertLogs("amp.parser", level="DEBUG") as captured:
            parse("let x = 1;", ParserConfiguration(debug_mode=True))

        self.assertTrue(any("advance" in message for message in captured.output))


class TestLoggingSetup(unittest.TestCase):
    """Test cases for setup_logging."""

    def tearDown(self):
        logger = logging.getLogger("amp")
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_replaces_handlers(self):
        setup_logging(logging.INFO)
        logger = setup_logging(logging.DEBUG)

        self.assertEqual(logger.name, "amp")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_json_format(self):
        logger = setup_logging(logging.INFO, json_format=True)
        stream = io.StringIO()
        logger.handlers[0].setStream(stream)

        logging.getLogger("amp.cli").info("parsing %s", "a.amp")

        entry = json.loads(stream.getvalue())
        self.assertEqual(entry["level"], "INFO")
        self.assertEqual(entry["logger"], "amp.cli")
        self.assertEqual(entry["message"], "parsing a.amp")

    def test_json_formatter_extra_data(self):
        record = logging.LogRecord("amp", logging.WARNING, __file__, 1, "msg", None, None)
        record.extra_data = {"file": "x.amp"}

        entry = json.loads(JSONFormatter().format(record))
        self.assertEqual(entry["file"], "x.amp")

    def test_json_timestamp_is_utc(self):
        record = logging.LogRecord("amp", logging.INFO, __file__, 1, "msg", None, None)
        record.created = 0.0

        entry = json.loads(JSONFormatter().format(record))
        self.assertEqual(entry["timestamp"], "1970-01-01T00:00:00+00:00")

    def test_log_file(self):
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "amp.log")
            logger = setup_logging(logging.INFO, log_file=path)
            logger.info("hello")
            for handler in logger.handlers[:]:
                handler.close()
                logger.removeHandler(handler)

            with open(path, encoding="utf-8") as f:
                self.assertIn("hello", f.read())


if __name__ == "__main__":
    unittest.main()
