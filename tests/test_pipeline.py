"""
Integration tests for Module 5: end-to-end pipeline and CLI.
"""

import struct

import numpy as np
import pytest

from src.module1_io.config import QRConfig
from src.module2_packetizer import packetize, parse_length_header, PayloadTooLargeError
from src.module2_packetizer.testing_utils import FakeErasureCoder
from src.module3_matrix.testing_utils import FakeMatrixEncoder
from src.module4_compositor import FrameCollector, canvas_size
from src.module5_pipeline import encode_payload, run_hex, run_text
from src.module5_pipeline.cli import main


CONFIG = QRConfig(
    symbol_size=64,
    main_color=0x00,
    back_color=0xFF,
    scaling=2,
    fps_num=1,
    fps_den=8,
    border=2,
)


class HugePayload:
    def __len__(self):
        return 2 ** 31


def encode_with_fakes(payload, config=CONFIG):
    sink = FrameCollector()
    result = encode_payload(
        payload, config, sink,
        coder=FakeErasureCoder(),
        matrix_encoder=FakeMatrixEncoder(),
    )
    return result, sink


class TestEncodePayload:
    """Pipeline with deterministic capabilities."""

    def test_one_frame_per_packet(self):
        payload = bytes(range(256)) * 2  # 512 bytes -> 8 source + 8 repair
        result, sink = encode_with_fakes(payload)

        assert result.num_packets == 16
        assert len(sink.frames) == 16
        assert sink.finished

    def test_uniform_frames(self):
        result, sink = encode_with_fakes(b'uniform' * 50)
        expected = canvas_size(result.matrix_size, CONFIG)

        assert result.canvas_size == expected
        for frame in sink.frames:
            assert frame.pixels.shape == (expected, expected)
            assert frame.delay == (1, 8)

    def test_small_payload_single_frame(self):
        result, sink = encode_with_fakes(b'tiny')
        assert result.num_packets == 1
        assert len(sink.frames) == 1

    def test_result_describes_packets(self):
        payload = b'p' * 300
        result, _ = encode_with_fakes(payload)
        packets = packetize(payload, CONFIG.symbol_size, coder=FakeErasureCoder())

        assert result.payload_length == 300
        assert result.packet_length == len(packets[0])
        assert result.delay == (1, 8)

    def test_idempotent(self):
        payload = b'same payload, same frames' * 20
        _, first = encode_with_fakes(payload)
        _, second = encode_with_fakes(payload)

        assert len(first.frames) == len(second.frames)
        for a, b in zip(first.frames, second.frames):
            assert a.to_bytes() == b.to_bytes()

    def test_payload_too_large_produces_nothing(self):
        sink = FrameCollector()
        with pytest.raises(PayloadTooLargeError):
            encode_payload(HugePayload(), CONFIG, sink, coder=FakeErasureCoder(),
                           matrix_encoder=FakeMatrixEncoder())
        assert sink.frames == []
        assert not sink.finished


class TestRealCapabilities:
    """Pipeline with RaptorQ and segno."""

    def test_frames_are_qr_sized(self):
        config = QRConfig(symbol_size=128, main_color=0, back_color=255,
                          scaling=1, fps_num=1, fps_den=10, border=0)
        sink = FrameCollector()
        result = encode_payload(bytes(range(256)), config, sink)

        # 2 source + 2 repair symbols of 128 bytes, 136-byte packets
        assert result.num_packets == 4
        assert result.packet_length == 4 + 4 + 128
        # QR side length is 17 + 4 * version
        assert (result.matrix_size - 17) % 4 == 0
        assert all(f.pixels.shape == (result.matrix_size,) * 2 for f in sink.frames)
        assert set(np.unique(sink.frames[0].pixels)) == {0, 255}

    def test_run_hex_writes_apng(self, tmp_path):
        source = tmp_path / 'message.hex'
        source.write_text((bytes(range(200)) * 3).hex())
        setup = tmp_path / 'setup.yaml'
        setup.write_text("packetizer:\n  symbol_size: 256\nrender:\n  scaling: 2\n  border: 1\n")
        output = tmp_path / 'message.png'

        result = run_hex(str(source), str(setup), str(output))

        assert result.num_packets == 5  # 3 source + 2 repair
        data = output.read_bytes()
        assert data[:8] == b'\x89PNG\r\n\x1a\n'
        actl = data.index(b'acTL')
        assert struct.unpack('>I', data[actl + 4:actl + 8])[0] == 5

    def test_run_text(self, tmp_path):
        source = tmp_path / 'note.txt'
        source.write_text("hello over the air\n")
        output = tmp_path / 'note.png'

        result = run_text(str(source), None, str(output))
        assert result.payload_length == len("hello over the air\n")
        assert result.num_packets == 1
        assert output.exists()


class TestCli:
    """Command-line entry point."""

    def test_success(self, tmp_path, capsys):
        source = tmp_path / 'data.hex'
        source.write_text('00112233445566778899aabbccddeeff')
        setup = tmp_path / 'constants'
        setup.write_text(
            "CHUNK_SIZE = 64;\nMAIN_COLOR = 0x00;\nBACK_COLOR = 0xff;\n"
            "SCALING = 2;\nFPS_NOM = 1;\nFPS_DEN = 5;\nBORDER = 2;\n"
        )

        assert main([str(source), str(setup)]) == 0
        assert (tmp_path / 'data.hex.png').exists()
        out = capsys.readouterr().out
        assert f"using setup file {setup}" in out

    def test_configuration_error_exit_code(self, tmp_path, capsys):
        source = tmp_path / 'data.hex'
        source.write_text('00ff')
        setup = tmp_path / 'constants'
        setup.write_text(
            "CHUNK_SIZE = 64;\nMAIN_COLOR = 0xaa;\nBACK_COLOR = 0xaa;\n"
            "SCALING = 2;\nFPS_NOM = 1;\nFPS_DEN = 5;\nBORDER = 2;\n"
        )

        assert main([str(source), str(setup), '-o', str(tmp_path / 'x.png')]) == 1
        assert "Application error" in capsys.readouterr().err
        assert not (tmp_path / 'x.png').exists()

    def test_empty_hex_payload(self, tmp_path):
        source = tmp_path / 'empty.hex'
        source.write_text('')
        setup = tmp_path / 'constants'
        setup.write_text(
            "CHUNK_SIZE = 64;\nMAIN_COLOR = 0x00;\nBACK_COLOR = 0xff;\n"
            "SCALING = 1;\nFPS_NOM = 1;\nFPS_DEN = 5;\nBORDER = 0;\n"
        )

        assert main([str(source), str(setup)]) == 0
        assert (tmp_path / 'empty.hex.png').exists()

    def test_missing_source(self, tmp_path, capsys):
        assert main([str(tmp_path / 'missing.hex')]) == 1
        assert "Application error" in capsys.readouterr().err

    def test_no_arguments(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2
