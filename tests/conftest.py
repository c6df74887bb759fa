# tests/conftest.py
"""
Pytest configuration and fixtures.
Adds src to sys.path so `import lootcore` works without an editable install.
"""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
src_root = project_root / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


@pytest.fixture
def bus():
    from lootcore.core.events import EventBus

    return EventBus()


@pytest.fixture
def log_messages():
    """收集 loguru 输出（WARNING 及以上），测试结束后移除 sink。"""
    from loguru import logger

    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
