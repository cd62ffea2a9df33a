"""Tests for WorkingMemory."""

from __future__ import annotations

import logging

from toolbot.memory import WorkingMemory
from toolbot.protocols import system, tool_result, user


def test_starts_with_seed(memory):
    assert len(memory) == 2
    assert [m.role for m in memory] == ["system", "user"]


def test_empty_by_default():
    assert len(WorkingMemory()) == 0
    assert WorkingMemory().to_openai() == []


def test_append_preserves_order(memory):
    memory.append([tool_result("a", "1"), tool_result("b", "2")])
    assert [m.tool_call_id for m in list(memory)[2:]] == ["a", "b"]


def test_snapshot_is_detached(memory):
    snap = memory.snapshot()
    memory.append([user("more")])
    assert len(snap) == 2
    assert len(memory) == 3


def test_to_openai(memory):
    assert memory.to_openai() == [
        {"role": "system", "content": "You are a test agent."},
        {"role": "user", "content": "Add some numbers."},
    ]


def test_append_logs_batch_at_debug(caplog):
    mem = WorkingMemory([system("s")])
    with caplog.at_level(logging.DEBUG, logger="toolbot.memory"):
        mem.append([user("hello")])
    assert '[{"role": "user", "content": "hello"}]' in caplog.text
