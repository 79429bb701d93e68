"""
Unit tests for Module 4: Frame Compositor.

Test coverage:
    - Canvas geometry and border
    - Nearest-neighbour module scaling and color mapping
    - Frame count, size and delay consistency
    - Dimension checks and sink state machine
"""

import numpy as np
import pytest

from src.module1_io.config import QRConfig
from src.module4_compositor import (
    composite,
    iter_frames,
    render_frame,
    canvas_size,
    Frame,
    FrameCollector,
    EmptyAnimationError,
    InconsistentFrameSizeError,
    AnimationStateError,
)


def make_config(**overrides):
    values = dict(
        symbol_size=100,
        main_color=0x00,
        back_color=0xFF,
        scaling=2,
        fps_num=1,
        fps_den=10,
        border=1,
    )
    values.update(overrides)
    return QRConfig(**values)


CHECKER = np.array([
    [1, 0, 1],
    [0, 1, 0],
    [1, 0, 1],
], dtype=bool)


class RecordingSink(FrameCollector):
    """Collector that also records the call order."""

    def __init__(self):
        super().__init__()
        self.events = []

    def append(self, frame):
        self.events.append('append')
        super().append(frame)

    def finish(self):
        self.events.append('finish')
        super().finish()


class TestGeometry:
    """Test canvas size and pixel mapping."""

    def test_canvas_size(self):
        assert canvas_size(3, make_config()) == 10
        assert canvas_size(21, make_config(scaling=4, border=4)) == 21 * 4 + 2 * 16

    def test_checker_example(self):
        """3x3 matrix, scaling 2, border 1 -> 10x10 with a 2px white ring."""
        pixels = render_frame(CHECKER, make_config())

        assert pixels.shape == (10, 10)
        assert pixels.dtype == np.uint8

        assert np.all(pixels[:2, :] == 0xFF)
        assert np.all(pixels[-2:, :] == 0xFF)
        assert np.all(pixels[:, :2] == 0xFF)
        assert np.all(pixels[:, -2:] == 0xFF)

        expected_interior = np.where(
            np.kron(CHECKER, np.ones((2, 2), dtype=bool)), 0x00, 0xFF
        ).astype(np.uint8)
        np.testing.assert_array_equal(pixels[2:8, 2:8], expected_interior)

    def test_pixel_mapping_formula(self):
        """Every pixel equals the module at (p // scaling - border)."""
        config = make_config(scaling=3, border=2)
        rng = np.random.default_rng(0)
        matrix = rng.random((5, 5)) > 0.5
        pixels = render_frame(matrix, config)

        size = canvas_size(5, config)
        assert pixels.shape == (size, size)
        for py in range(size):
            for px in range(size):
                mx = px // config.scaling - config.border
                my = py // config.scaling - config.border
                if 0 <= mx < 5 and 0 <= my < 5:
                    expected = config.main_color if matrix[my, mx] else config.back_color
                else:
                    expected = config.back_color
                assert pixels[py, px] == expected

    def test_no_border(self):
        pixels = render_frame(CHECKER, make_config(border=0, scaling=1))
        expected = np.where(CHECKER, 0x00, 0xFF).astype(np.uint8)
        np.testing.assert_array_equal(pixels, expected)

    def test_custom_colors(self):
        config = make_config(main_color=0x20, back_color=0xC0, border=0, scaling=1)
        pixels = render_frame(CHECKER, config)
        assert set(np.unique(pixels)) == {0x20, 0xC0}

    def test_border_never_foreground(self):
        all_dark = np.ones((4, 4), dtype=bool)
        pixels = render_frame(all_dark, make_config(scaling=1, border=3))
        assert np.all(pixels[:3, :] == 0xFF)
        assert np.all(pixels[3:7, 3:7] == 0x00)


class TestComposite:
    """Test frame streaming into a sink."""

    def test_frame_count_size_and_delay(self):
        matrices = [CHECKER, ~CHECKER, CHECKER]
        sink = FrameCollector()
        summary = composite(matrices, make_config(fps_num=3, fps_den=7), sink)

        assert summary.num_frames == 3
        assert summary.width == summary.height == 10
        assert summary.delay == (3, 7)
        assert sink.finished
        assert len(sink.frames) == 3
        for frame in sink.frames:
            assert (frame.width, frame.height) == (10, 10)
            assert frame.delay == (3, 7)

    def test_frames_in_input_order(self):
        sink = FrameCollector()
        composite([CHECKER, ~CHECKER], make_config(), sink)
        np.testing.assert_array_equal(sink.frames[0].pixels, render_frame(CHECKER, make_config()))
        np.testing.assert_array_equal(sink.frames[1].pixels, render_frame(~CHECKER, make_config()))

    def test_single_pass_iterable(self):
        """Matrices are consumed once; size checks and rendering share one pass."""
        sink = FrameCollector()
        summary = composite((m for m in [CHECKER, ~CHECKER]), make_config(), sink)
        assert summary.num_frames == 2
        assert summary.delay == make_config().delay
        assert [f.delay for f in sink.frames] == [(1, 10), (1, 10)]

    def test_append_then_finish_once(self):
        sink = RecordingSink()
        composite([CHECKER, CHECKER], make_config(), sink)
        assert sink.events == ['append', 'append', 'finish']

    def test_empty_rejected(self):
        sink = RecordingSink()
        with pytest.raises(EmptyAnimationError):
            composite([], make_config(), sink)
        assert sink.events == []

    def test_inconsistent_sizes_rejected_before_output(self):
        sink = RecordingSink()
        matrices = [CHECKER, np.zeros((4, 4), dtype=bool)]
        with pytest.raises(InconsistentFrameSizeError) as exc_info:
            composite(matrices, make_config(), sink)
        assert exc_info.value.index == 1
        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 4
        assert sink.events == []

    def test_non_square_rejected(self):
        with pytest.raises(InconsistentFrameSizeError, match="not square"):
            composite([np.zeros((3, 4), dtype=bool)], make_config(), FrameCollector())

    def test_iter_frames_is_lazy_and_ordered(self):
        frames = iter_frames([CHECKER, ~CHECKER], make_config())
        first = next(frames)
        assert isinstance(first, Frame)
        assert first.pixels[2, 2] == 0x00
        second = next(frames)
        assert second.pixels[2, 2] == 0xFF

    def test_frame_bytes_length(self):
        frame = next(iter_frames([CHECKER], make_config()))
        assert len(frame.to_bytes()) == 10 * 10

    def test_deterministic(self):
        a, b = FrameCollector(), FrameCollector()
        composite([CHECKER], make_config(), a)
        composite([CHECKER], make_config(), b)
        assert a.frames[0].to_bytes() == b.frames[0].to_bytes()


class TestFrameCollector:
    """Test the Empty -> Building -> Finalized order."""

    def test_append_after_finish_raises(self):
        sink = FrameCollector()
        sink.finish()
        with pytest.raises(AnimationStateError):
            sink.append(Frame(pixels=np.zeros((2, 2), dtype=np.uint8), delay=(1, 1)))

    def test_double_finish_raises(self):
        sink = FrameCollector()
        sink.finish()
        with pytest.raises(AnimationStateError):
            sink.finish()
