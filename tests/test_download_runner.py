import pytest
import requests

from netbolt.measurements.download_runner import measure_download

from .fakes import MIB, FakeClock, FakeTransport


def test_download_speed_uses_bytes_received(config, progress):
    transport = FakeTransport(chunks=[b"\0" * MIB] * 100, content_length=100 * MIB)

    outcome = measure_download(config, transport, progress, clock=FakeClock(0.0, 8.0))

    assert outcome.ok
    assert outcome.speed_mbps == pytest.approx(100.0)
    assert outcome.measurement.bytes_transferred == 100 * MIB
    assert transport.get_urls == [config.download.url]


def test_progress_tracks_cumulative_bytes(config, progress):
    transport = FakeTransport(chunks=[b"a" * 10, b"b" * 5, b"c" * 20], content_length=35)

    measure_download(config, transport, progress, clock=FakeClock(0.0, 1.0))

    bar = progress.bars[0]
    assert bar.total == 35
    assert bar.positions == [10, 15, 35]
    assert bar.closed


def test_missing_content_length_only_scales_progress(config, progress):
    # 50 MiB actually arrives although the nominal size is 100 MB
    transport = FakeTransport(chunks=[b"\0" * MIB] * 50, content_length=None)

    outcome = measure_download(config, transport, progress, clock=FakeClock(0.0, 4.0))

    assert progress.bars[0].total == config.download.nominal_size
    assert outcome.speed_mbps == pytest.approx(100.0)


def test_unreachable_host_is_a_failure(config, progress):
    transport = FakeTransport(get_error=requests.ConnectionError("Name or service not known"))

    outcome = measure_download(config, transport, progress, clock=FakeClock(0.0))

    assert not outcome.ok
    assert "Name or service not known" in outcome.error
    assert outcome.speed_mbps is None


def test_error_mid_stream_discards_partial_bytes(config, progress):
    transport = FakeTransport(
        chunks=[b"\0" * 1024] * 3,
        content_length=10 * 1024,
        stream_error=requests.exceptions.ChunkedEncodingError("Connection reset by peer"),
    )

    outcome = measure_download(config, transport, progress, clock=FakeClock(0.0, 2.0))

    assert not outcome.ok
    assert outcome.measurement is None
    assert "Connection reset by peer" in outcome.error
    assert progress.bars[0].closed


def test_non_success_status_is_a_failure(config, progress):
    transport = FakeTransport(get_error=requests.HTTPError("503 Server Error: Service Unavailable"))

    outcome = measure_download(config, transport, progress, clock=FakeClock(0.0))

    assert not outcome.ok
    assert "503" in outcome.error


def test_empty_body_is_a_failure(config, progress):
    transport = FakeTransport(chunks=[], content_length=None)

    outcome = measure_download(config, transport, progress, clock=FakeClock(0.0, 1.0))

    assert not outcome.ok
    assert outcome.error == "Download returned an empty body"
    assert progress.bars[0].closed


def test_zero_elapsed_time_is_a_failure(config, progress):
    transport = FakeTransport(chunks=[b"\0" * 4096], content_length=4096)

    outcome = measure_download(config, transport, progress, clock=FakeClock(3.0, 3.0))

    assert not outcome.ok
    assert outcome.speed_mbps is None
    assert progress.bars[0].closed


def test_same_inputs_give_same_result(config, progress):
    results = [
        measure_download(
            config,
            FakeTransport(chunks=[b"\0" * MIB] * 12, content_length=12 * MIB),
            progress,
            clock=FakeClock(1.0, 2.5),
        ).speed_mbps
        for _ in range(2)
    ]

    assert results[0] == results[1] == pytest.approx(64.0)
