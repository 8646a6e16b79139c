import os
import logging

import pytest

from tagger_options.utils import logging_utils


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    for key in list(os.environ):
        if key.startswith("TAGGER_"):
            monkeypatch.delenv(key)

    yield

    # setup_logger caches loggers with propagation off; undo that between tests.
    for logger in logging_utils._loggers.values():
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
    logging_utils._loggers.clear()
