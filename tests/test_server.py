import logging
from logging.handlers import RotatingFileHandler

from dungeongen import create_app
from dungeongen.server import _configure_logging


def test_configure_logging_writes_instance_log(tmp_path, preserve_root_logging):
    app = create_app({"TESTING": True})
    app.instance_path = str(tmp_path)
    # Run twice to ensure the handler replace path keeps a single file handler
    _configure_logging(app)
    log_path = _configure_logging(app)
    assert log_path == str(tmp_path / "dungeongen.log")
    root = preserve_root_logging
    file_handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    logging.getLogger("dungeongen.test").info("hello from test")
    file_handlers[0].flush()
    assert "hello from test" in (tmp_path / "dungeongen.log").read_text()
