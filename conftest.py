import sys
import logging
import io
import datetime
import pathlib
import pytest
if sys.version_info < (3, 8):
    pytest.exit("Python >= 3.8 is required to run tests. Current version: {}".format(sys.version.replace("\n", " ")))


LOG_DIR = pathlib.Path(__file__).parent / "test-logs"


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    # Attach the TestReport (with .outcome) to the item so fixtures can see the
    # outcome in teardown.
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture(autouse=True)
def capture_test_logs(request):
    """Capture trisoup logging for each test into an in-memory buffer and
    write it to test-logs/ only when the test fails.
    """
    log = logging.getLogger("trisoup")
    prev_level = log.level
    prev_propagate = log.propagate
    prev_handlers = list(log.handlers)

    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    log.addHandler(handler)
    log.setLevel(logging.DEBUG)

    try:
        yield
    finally:
        for h in list(log.handlers):
            log.removeHandler(h)
        for h in prev_handlers:
            log.addHandler(h)
        log.setLevel(prev_level)
        log.propagate = prev_propagate

        rep = getattr(request.node, "rep_call", None)
        if rep is not None and getattr(rep, "outcome", None) == "failed":
            LOG_DIR.mkdir(exist_ok=True)
            nodeid = request.node.nodeid.replace("::", "__").replace("/", "_")
            ts = datetime.datetime.now().strftime("%Y%m%dT%H%M%S")
            fname = LOG_DIR / ("{}__{}.log".format(nodeid, ts))
            with open(fname, "w", encoding="utf-8") as f:
                f.write("=== Test: {}\n".format(request.node.nodeid))
                f.write("=== Timestamp: {}\n\n".format(ts))
                f.write(buf.getvalue())
