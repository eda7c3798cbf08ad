import logging

import pytest

from takeout_datefix.common.logging import DetailedFormatter, SimpleFormatter, StructuredFormatter


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Drop handlers installed by setup_logging so tests don't leak them."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, (DetailedFormatter, SimpleFormatter, StructuredFormatter)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
