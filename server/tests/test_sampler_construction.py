from __future__ import annotations

import io
from pathlib import Path

import pytest
from random_line import AppError, ErrorCode, LineSource, RandomLineSampler


def _write(tmp_path: Path, data: bytes, name: str = "lines.txt") -> Path:
    fp = tmp_path / name
    fp.write_bytes(data)
    return fp


def test_bad_algorithm_is_invalid_argument(tmp_path: Path) -> None:
    fp = _write(tmp_path, b"alpha\n")
    for bad in ("nonsense", "fastest", "", " fast"):
        with pytest.raises(AppError) as exc:
            RandomLineSampler.open(fp, bad)
        assert exc.value.code is ErrorCode.INVALID_ARGUMENT


def test_bad_algorithm_checked_before_opening(tmp_path: Path) -> None:
    with pytest.raises(AppError) as exc:
        RandomLineSampler.open(tmp_path / "missing.txt", "nonsense")
    assert exc.value.code is ErrorCode.INVALID_ARGUMENT


def test_algorithm_is_case_insensitive(tmp_path: Path) -> None:
    fp = _write(tmp_path, b"alpha\nbeta\n")
    with RandomLineSampler.open(fp, "UNIFORM") as s1:
        assert s1.algorithm == "uniform"
        assert s1.line_count == 2
    with RandomLineSampler.open(fp, "Fast") as s2:
        assert s2.algorithm == "fast"
        assert s2.line_count is None
    with RandomLineSampler.open(fp, None) as s3:
        assert s3.algorithm == "fast"


@pytest.mark.parametrize("algorithm", ["fast", "uniform"])
def test_empty_file_rejected(tmp_path: Path, algorithm: str) -> None:
    fp = _write(tmp_path, b"")
    with pytest.raises(AppError) as exc:
        RandomLineSampler.open(fp, algorithm)
    assert exc.value.code is ErrorCode.INVALID_ARGUMENT


def test_empty_stream_rejected_without_partial_sampler() -> None:
    src = LineSource.from_stream(io.BytesIO(b""))
    with pytest.raises(AppError) as exc:
        RandomLineSampler(src, "uniform")
    assert exc.value.code is ErrorCode.INVALID_ARGUMENT


def test_missing_path_errors(tmp_path: Path) -> None:
    with pytest.raises(AppError) as no_name:
        RandomLineSampler.open(None)
    assert no_name.value.code is ErrorCode.INVALID_ARGUMENT
    with pytest.raises(AppError) as missing:
        RandomLineSampler.open(tmp_path / "missing.txt")
    assert missing.value.code is ErrorCode.IO_ERROR


def test_sampler_over_prebuilt_stream() -> None:
    src = LineSource.from_stream(io.BytesIO(b"alpha\nbeta\ngamma\n"), name="mem")
    sampler = RandomLineSampler(src, "uniform", seed=3)
    assert sampler.size == 17
    assert sampler.path == "mem"
    assert sampler.line_count == 3
    assert sampler.next() in {"alpha", "beta", "gamma"}
    sampler.close()
    assert src.closed


def test_construction_logs_ready_event(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    fp = _write(tmp_path, b"a\nb\nc\n")
    with caplog.at_level("INFO", logger="random_line"):
        RandomLineSampler.open(fp, "uniform").close()
    record = next(r for r in caplog.records if r.getMessage() == "Random line sampler ready")
    assert getattr(record, "algorithm", None) == "uniform"
    assert getattr(record, "line_count", None) == 3
    assert getattr(record, "size", None) == 6
