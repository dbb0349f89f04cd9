"""Smoke tests for the layout benchmark CLI."""
import random
import sys

import pytest

import layout_bench
from layout_bench import LayoutMetrics, check_overlaps, generate_photos, run_bench
from models import GeometryConfig, Layer


class TestMetrics:

    def test_generated_photos(self):
        photos = generate_photos(5, random.Random(1))
        assert [p.id for p in photos] == [f"photo-{i:03d}" for i in range(5)]

    def test_overlap_detected(self):
        a = Layer(photo_id='a', x=0, y=0, width=50, height=50)
        b = Layer(photo_id='b', x=25, y=25, width=50, height=50)
        c = Layer(photo_id='c', x=50, y=20, width=10, height=10)
        assert check_overlaps([a, b, c]) == [('a', 'b'), ('b', 'c')]

    def test_flags_distorted_layer(self, make_photos):
        config = GeometryConfig(page_width=1000, page_height=1000, gap=10, margin=0)
        [photo] = make_photos([2.0])
        layer = Layer(photo_id='p0', x=0, y=0, width=50, height=50)
        metrics = LayoutMetrics([photo], config, [layer])
        assert metrics.ar_max_error == pytest.approx(0.5)
        assert not metrics.passed


class TestRunBench:

    def test_generated_photos_pass(self, capsys):
        assert run_bench(24, 5, seed=3)
        out = capsys.readouterr().out
        assert "ALL CHECKS PASSED" in out
        assert "Suggestions for spread 1" in out

    def test_density_mode(self, capsys):
        assert run_bench(30, 0, seed=7, min_density=3, max_density=6)

    def test_photo_directory(self, photo_dir, capsys):
        assert run_bench(0, 1, seed=1, photo_dir=str(photo_dir), verbose=True)
        out = capsys.readouterr().out
        assert "[a_rotated.jpg]" in out

    def test_empty_directory_fails(self, tmp_path, capsys):
        assert not run_bench(0, 1, seed=1, photo_dir=str(tmp_path))

    def test_main_exit_code(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, 'argv', ['spread-bench', '-n', '12', '-s', '3', '--variation', '5'])
        with pytest.raises(SystemExit) as exc:
            layout_bench.main()
        assert exc.value.code == 0
