"""
Tests for mrt_tracker.services.registry — PointRegistry and station-file loading.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from mrt_tracker.exceptions import DuplicatePointError, EmptyRegistryError, RegistryLoadError
from mrt_tracker.models.point import Coordinate, Point
from mrt_tracker.services.registry import PointRegistry, load_registry, parse_registry
from mrt_tracker.spatial.transform import BoundingRectangle, MarkerPosition

from tests.conftest import ALPHA, BETA, make_point


def _write_stations(tmp_path: Path, stations) -> Path:
    path = tmp_path / "stations.json"
    path.write_text(json.dumps({"stations": stations}), encoding="utf-8")
    return path


# ═══════════════════════════════════════════════════════════════════
# PointRegistry
# ═══════════════════════════════════════════════════════════════════
class TestPointRegistry:
    def test_preserves_order(self):
        pts = [make_point(id=str(i), lat=1.0 + i / 10) for i in range(5)]
        reg = PointRegistry(pts)
        assert [p.id for p in reg] == ["0", "1", "2", "3", "4"]
        assert reg.points == tuple(pts)
        assert reg[2] is pts[2]
        assert len(reg) == 5

    def test_accepts_generator(self):
        reg = PointRegistry(p for p in [ALPHA, BETA])
        assert len(reg) == 2

    def test_bounds_memoised(self, alpha_beta_registry):
        b = alpha_beta_registry.bounds
        assert b == BoundingRectangle(1.30, 1.40, 103.80, 103.90)
        assert alpha_beta_registry.bounds is b

    def test_immutable_against_source_list(self, alpha_beta):
        reg = PointRegistry(alpha_beta)
        alpha_beta.append(make_point(id="C", lat=10.0))
        assert len(reg) == 2
        assert reg.bounds.max_lat == 1.40

    def test_empty_rejected(self):
        with pytest.raises(EmptyRegistryError):
            PointRegistry([])

    def test_duplicate_id_rejected(self):
        with pytest.raises(DuplicatePointError) as exc_info:
            PointRegistry([ALPHA, make_point(id="A", lat=2.0)])
        assert exc_info.value.point_id == "A"

    def test_get(self, alpha_beta_registry):
        assert alpha_beta_registry.get("B") == BETA
        assert alpha_beta_registry.get("missing") is None

    def test_contains(self, alpha_beta_registry):
        assert ALPHA in alpha_beta_registry

    def test_find_closest(self, alpha_beta_registry):
        assert alpha_beta_registry.find_closest(Coordinate(1.31, 103.81)) == ALPHA

    def test_find_closest_match(self, alpha_beta_registry):
        m = alpha_beta_registry.find_closest_match(Coordinate(1.39, 103.89))
        assert m.point == BETA

    def test_rank(self, alpha_beta_registry):
        ranked = alpha_beta_registry.rank(Coordinate(1.31, 103.81), limit=1)
        assert [m.point for m in ranked] == [ALPHA]

    def test_project_uses_own_bounds(self, alpha_beta_registry):
        m = alpha_beta_registry.project(Coordinate(1.35, 103.85))
        assert m.x == pytest.approx(50.0)
        assert m.y == pytest.approx(50.0)

    def test_single_point_registry_projects_to_center(self):
        reg = PointRegistry([ALPHA])
        assert reg.project(Coordinate(5.0, 100.0)) == MarkerPosition(50, 50)

    def test_repr(self, alpha_beta_registry):
        assert repr(alpha_beta_registry) == "PointRegistry(2 points)"


# ═══════════════════════════════════════════════════════════════════
# Loading
# ═══════════════════════════════════════════════════════════════════
class TestParseRegistry:
    def test_valid(self):
        raw = json.dumps({"stations": [
            {"id": "A", "name": "Alpha", "lat": 1.3, "long": 103.8},
            {"id": "B", "name": "Beta", "lat": 1.4, "long": 103.9},
        ]})
        reg = parse_registry(raw)
        assert reg.points == (ALPHA, BETA)

    def test_invalid_json(self):
        with pytest.raises(RegistryLoadError) as exc_info:
            parse_registry("{not json", source="broken.json")
        assert exc_info.value.source == "broken.json"

    def test_empty_station_list(self):
        with pytest.raises(RegistryLoadError):
            parse_registry('{"stations": []}')

    @pytest.mark.parametrize("station", [
        {"id": "A", "name": "Alpha", "lat": 91.0, "long": 103.8},
        {"id": "A", "name": "Alpha", "lat": 1.3, "long": -181.0},
        {"id": "", "name": "Alpha", "lat": 1.3, "long": 103.8},
        {"id": "A", "name": "   ", "lat": 1.3, "long": 103.8},
        {"id": "A", "name": "Alpha", "lat": 1.3},
    ])
    def test_schema_violations(self, station):
        with pytest.raises(RegistryLoadError):
            parse_registry(json.dumps({"stations": [station]}))

    def test_duplicate_ids(self):
        raw = json.dumps({"stations": [
            {"id": "A", "name": "Alpha", "lat": 1.3, "long": 103.8},
            {"id": "A", "name": "Again", "lat": 1.4, "long": 103.9},
        ]})
        with pytest.raises(DuplicatePointError):
            parse_registry(raw)


class TestLoadRegistry:
    def test_bundled(self):
        reg = load_registry()
        assert len(reg) > 20
        assert reg.get("NS9").name == "Woodlands"
        assert not reg.bounds.is_degenerate

    def test_bundled_ids_unique_and_in_singapore(self):
        reg = load_registry()
        for p in reg:
            assert 1.2 < p.lat < 1.5
            assert 103.6 < p.long < 104.1

    def test_bundled_bounds_cover_network_extent(self):
        b = load_registry().bounds
        assert b == BoundingRectangle(
            min_lat=1.265453,
            max_lat=1.448193,
            min_long=103.636866,
            max_long=103.988836,
        )

    def test_bundled_includes_lrt(self):
        reg = load_registry()
        assert reg.get("TE1").name == "Woodlands North"
        assert {"BP6", "SE1", "PE1"} <= {p.id for p in reg}

    def test_from_path(self, tmp_path):
        path = _write_stations(tmp_path, [
            {"id": "A", "name": "Alpha", "lat": 1.3, "long": 103.8},
        ])
        reg = load_registry(path)
        assert reg.points == (Point("A", "Alpha", 1.3, 103.8),)

    def test_from_str_path(self, tmp_path):
        path = _write_stations(tmp_path, [
            {"id": "A", "name": "Alpha", "lat": 1.3, "long": 103.8},
        ])
        assert len(load_registry(str(path))) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_registry(tmp_path / "nope.json")

    def test_bad_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(RegistryLoadError) as exc_info:
            load_registry(path)
        assert str(path) in str(exc_info.value)

    def test_logs_summary(self, caplog):
        with caplog.at_level(logging.INFO, logger="mrt_tracker.services.registry"):
            load_registry()
        assert "Loaded" in caplog.text
