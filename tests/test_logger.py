from roster.api.errors import NotFoundError
from roster.utils.logger import ActivityLogger


def test_log_and_read_back_newest_first(tmp_path):
    logger = ActivityLogger(log_dir=str(tmp_path))
    logger.log_operation("refresh", "success", metadata={"count": 2})
    logger.log_operation("delete", "error", student_id="abc", error=NotFoundError("gone", 404))
    logger.log_operation("refresh", "error")

    entries = logger.get_activity()
    assert [e["operation"] for e in entries] == ["refresh", "delete", "refresh"]
    assert entries[1]["error_type"] == "NotFoundError"
    assert entries[1]["error_detail"] == "gone"
    assert entries[1]["student_id"] == "abc"


def test_filters_and_limit(tmp_path):
    logger = ActivityLogger(log_dir=str(tmp_path))
    for outcome in ("success", "error", "success"):
        logger.log_operation("refresh", outcome)
    logger.log_operation("create", "success")

    assert len(logger.get_activity(operation="refresh")) == 3
    assert len(logger.get_activity(operation="refresh", outcome="success")) == 2
    assert len(logger.get_activity(limit=1)) == 1


def test_skips_malformed_lines(tmp_path):
    logger = ActivityLogger(log_dir=str(tmp_path))
    logger.log_operation("refresh", "success")
    with open(logger.log_file, "a", encoding="utf-8") as f:
        f.write("not json\n\n")
    assert len(logger.get_activity()) == 1


def test_missing_file_returns_empty(tmp_path):
    logger = ActivityLogger(log_dir=str(tmp_path))
    assert logger.get_activity() == []
