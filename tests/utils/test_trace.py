import pytest

from py6502.cpu import CPUState
from py6502.utils.trace import TraceRecorder


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)

    recorder.record_step(0x1000, CPUState(a=0x11, x=0x22, y=0x33, sp=0xFF), 0xA9, 2, mnemonic="LDA")
    recorder.record_step(0x1002, CPUState(a=0x44, sp=0xFD, n=True), 0x20, 6, mnemonic="JSR")
    recorder.record_step(0x4242, CPUState(a=0x00, z=True), 0xB5, 4, mnemonic="LDA", note="zpx")

    lines = list(recorder.format_entries())
    assert len(recorder) == 2
    assert len(lines) == 2
    assert "pc=1002" in lines[0]
    assert "JSR" in lines[0]
    assert "P=A0" in lines[0]
    assert "pc=4242" in lines[1]
    assert "P=22" in lines[1]
    assert "note=zpx" in lines[1]


def test_trace_recorder_handles_missing_opcode():
    recorder = TraceRecorder(1)
    recorder.record_step(0x2000, CPUState(), None, 0, note="halted")

    lines = list(recorder.format_entries())
    assert len(lines) == 1
    assert "opcode=--" in lines[0]
    assert "?" in lines[0]
    assert "note=halted" in lines[0]


def test_trace_recorder_limit_and_last_entry():
    recorder = TraceRecorder(4)
    assert recorder.last_entry() is None

    for index in range(3):
        recorder.record_step(0x0600 + index * 2, CPUState(a=index), 0xA9, 2, mnemonic="LDA")

    assert [entry.a for entry in recorder.entries(limit=2)] == [1, 2]
    assert recorder.last_entry().pc == 0x0604

    recorder.clear()
    assert list(recorder.entries()) == []


def test_trace_recorder_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        TraceRecorder(0)
