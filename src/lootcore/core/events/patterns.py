"""
通配符事件名匹配：``*`` 匹配任意序列，``?`` 匹配单个字符。
"""

from __future__ import annotations

import re
from typing import Pattern

WILDCARD_CHANNEL = "*"


def pattern_to_regex(pattern: str) -> Pattern[str]:
    # 先整体转义，再把转义后的通配符还原为正则
    escaped = re.escape(pattern)
    translated = escaped.replace(r"\*", ".*").replace(r"\?", ".")
    return re.compile(f"^{translated}$")


def matches(pattern: str, event_name: str) -> bool:
    return pattern_to_regex(pattern).fullmatch(event_name) is not None
