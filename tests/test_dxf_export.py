"""
Tests for writing nesting layouts back to DXF.
"""

import io

import ezdxf
import pytest

from sheetnest.core.exceptions import ExportError
from sheetnest.nesting import calculate_nesting, nest_groups
from sheetnest.nesting.dxf_export import (
    export_layout, export_layouts, layout_to_dxf_text,
)

from conftest import make_group


def _read(text):
    return ezdxf.read(io.StringIO(text)).modelspace()


def _points(msp, layer):
    points = []
    for entity in msp.query(f'LWPOLYLINE[layer=="{layer}"]'):
        points.extend(entity.get_points('xy'))
    return points


class TestLayoutExport:

    def test_layers_and_entities(self, plate_with_hole_dxf, params):
        result = calculate_nesting(plate_with_hole_dxf, 2.0, params)[0]

        msp = _read(layout_to_dxf_text(result))

        assert len(msp.query('LWPOLYLINE[layer=="SHEET"]')) == 1
        assert len(msp.query('LWPOLYLINE[layer=="FOOTPRINT"]')) == 1
        assert len(msp.query('LWPOLYLINE[layer=="CUT"]')) == 1
        assert len(msp.query('CIRCLE[layer=="HOLES"]')) == 1

    def test_parts_moved_into_place(self, plate_with_hole_dxf, params):
        result = calculate_nesting(plate_with_hole_dxf, 2.0, params)[0]

        msp = _read(layout_to_dxf_text(result))

        xs = [x for x, _ in _points(msp, "CUT")]
        ys = [y for _, y in _points(msp, "CUT")]
        assert min(xs) == pytest.approx(10)
        assert max(xs) == pytest.approx(110)
        assert min(ys) == pytest.approx(10)
        assert max(ys) == pytest.approx(110)

        hole = msp.query('CIRCLE[layer=="HOLES"]').first
        assert hole.dxf.center.x == pytest.approx(60)
        assert hole.dxf.center.y == pytest.approx(60)

    def test_rotated_part_stays_in_footprint(self, params):
        result = nest_groups([make_group(2000, 400, x=-300, y=75)], 2.0, params)[0]
        placed = result.placed_groups[0]
        assert placed.rotation == 90

        msp = _read(layout_to_dxf_text(result))

        for x, y in _points(msp, "CUT"):
            assert 10 - 1e-6 <= x <= 410 + 1e-6
            assert 10 - 1e-6 <= y <= 2010 + 1e-6

        xs = [x for x, _ in _points(msp, "CUT")]
        ys = [y for _, y in _points(msp, "CUT")]
        assert max(xs) - min(xs) == pytest.approx(400)
        assert max(ys) - min(ys) == pytest.approx(2000)

    def test_sheet_outline_matches_result(self, two_rectangles_dxf, params):
        result = calculate_nesting(two_rectangles_dxf, 2.0, params)[0]

        msp = _read(layout_to_dxf_text(result))

        points = _points(msp, "SHEET")
        assert max(x for x, _ in points) == pytest.approx(1030)
        assert max(y for _, y in points) == pytest.approx(320)


class TestExportFiles:

    def test_export_single_layout(self, tmp_path, two_rectangles_dxf, params):
        results = calculate_nesting(two_rectangles_dxf, 2.0, params)

        files = export_layouts(results[:1], str(tmp_path / "nest.dxf"))

        assert files == [str(tmp_path / "nest.dxf")]
        assert ezdxf.readfile(files[0]).modelspace().query('LWPOLYLINE[layer=="CUT"]')

    def test_export_numbers_multiple_layouts(self, tmp_path):
        groups = [make_group(w, h) for w, h in [(600, 200), (150, 900), (400, 400), (80, 700)]]
        results = nest_groups(groups, 2.0)
        if len(results) < 2:
            results = results * 2

        files = export_layouts(results, str(tmp_path / "nest.dxf"))

        assert len(files) == len(results)
        assert files[0].endswith(f"nest_1_{results[0].strategy}.dxf")

    def test_unwritable_path(self, tmp_path, two_rectangles_dxf, params):
        result = calculate_nesting(two_rectangles_dxf, 2.0, params)[0]
        with pytest.raises(ExportError):
            export_layout(result, str(tmp_path / "missing" / "nest.dxf"))
