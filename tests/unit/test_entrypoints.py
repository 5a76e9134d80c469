"""
tests/unit/test_entrypoints.py - Tests for logging setup and the diagram CLI.
"""

import json
import logging
import textwrap

import pytest

from reactive.bootstrap import config as config_module
from reactive.bootstrap.entrypoints import (
    JSONFormatter,
    diagram_main,
    load_record_type,
    setup_logging,
)

SAMPLE_MODULE = textwrap.dedent("""
    from reactive import RecordType

    calc = RecordType("Calculator", ["a", "b", "sum"])
    calc.register("sum", ["a", "b"], lambda a, b: a + b)

    broken = RecordType("Broken", ["a", "b"])
    try:
        broken.register("a", ["b"], lambda b: b)
        broken.register("b", ["a"], lambda a: a)
    except Exception:
        pass

    not_a_type = 42
""")


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handlers added by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def sample_module(tmp_path, monkeypatch):
    """Importable module defining record types."""
    (tmp_path / "reactive_cli_sample.py").write_text(SAMPLE_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.setattr(config_module, "_config", None)
    monkeypatch.delenv("REACTIVE_DEBUG", raising=False)
    monkeypatch.delenv("REACTIVE_JSON_LOGS", raising=False)
    return "reactive_cli_sample"


class TestSetupLogging:
    """Test logging configuration."""

    def test_level_and_handler(self):
        """Test the root logger gets a handler at the given level."""
        root = logging.getLogger()
        before = len(root.handlers)
        setup_logging(level="WARNING")
        assert root.level == logging.WARNING
        assert len(root.handlers) == before + 1

    def test_json_formatter(self):
        """Test JSON log output."""
        setup_logging(level="INFO", json_format=True)
        assert isinstance(logging.getLogger().handlers[-1].formatter, JSONFormatter)

        record = logging.LogRecord("reactive.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "reactive.test"

    def test_log_file(self, tmp_path):
        """Test a file handler is attached when a path is given."""
        log_file = tmp_path / "reactive.log"
        setup_logging(level="INFO", log_file=str(log_file))
        logging.getLogger("reactive.test").info("written")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "written" in log_file.read_text()


class TestLoadRecordType:
    """Test resolving package.module:attribute targets."""

    def test_load(self, sample_module):
        """Test a valid target."""
        record_type = load_record_type(f"{sample_module}:calc")
        assert record_type.name == "Calculator"

    def test_malformed_target(self):
        """Test targets without a colon."""
        with pytest.raises(ValueError):
            load_record_type("no_colon_here")

    def test_missing_module(self):
        """Test an unimportable module."""
        with pytest.raises(ImportError):
            load_record_type("reactive_no_such_module:calc")

    def test_missing_attribute(self, sample_module):
        """Test an absent attribute."""
        with pytest.raises(AttributeError):
            load_record_type(f"{sample_module}:nope")

    def test_not_a_record_type(self, sample_module):
        """Test an attribute of the wrong type."""
        with pytest.raises(TypeError, match="not a RecordType"):
            load_record_type(f"{sample_module}:not_a_type")


class TestDiagramMain:
    """Test the reactive-diagram command."""

    def test_prints_diagram(self, sample_module, capsys):
        """Test the default Mermaid output."""
        assert diagram_main([f"{sample_module}:calc"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("flowchart TD")
        assert "A --> SUM" in out

    def test_json_output(self, sample_module, capsys):
        """Test the JSON graph output."""
        assert diagram_main([f"{sample_module}:calc", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["order"] == ["sum"]
        assert data["input_fields"] == ["a", "b"]

    def test_bad_target(self, sample_module, capsys):
        """Test errors become exit code 1."""
        assert diagram_main(["no_colon_here"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_broken_record_type(self, sample_module, capsys):
        """Test a record type with a failed registration is reported."""
        assert diagram_main([f"{sample_module}:broken", "--json"]) == 1
        assert "invalid dependency graph" in capsys.readouterr().err
