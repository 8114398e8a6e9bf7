"""Tests for vehicle invariant checks."""

from dataclasses import replace

from fleet_telemetry.validation.range_checks import check_fleet, check_vehicle


class TestRangeChecks:
    def test_fresh_fleet_passes(self, fleet, base_profile):
        report = check_fleet(fleet, base_profile)
        assert report.passed
        assert report.n_failed == 0

    def test_out_of_range_attribute(self, vehicle, path, base_profile):
        fast = replace(vehicle, attributes=replace(vehicle.attributes, speed=150.0))
        report = check_vehicle(fast, path, base_profile)
        assert not report.passed
        assert [r.check for r in report.failures] == ["range/speed"]

    def test_position_mismatch(self, vehicle, path, base_profile):
        drifted = replace(vehicle, path_index=3)
        report = check_vehicle(drifted, path, base_profile)
        assert [r.check for r in report.failures] == ["path/position"]

    def test_index_out_of_path(self, vehicle, path, base_profile):
        lost = replace(vehicle, path_index=25)
        checks = {r.check for r in check_vehicle(lost, path, base_profile).failures}
        assert checks == {"path/index", "path/position"}

    def test_summary_lists_failures(self, vehicle, path, base_profile):
        cold = replace(vehicle, attributes=replace(vehicle.attributes, temperature=-5.0))
        summary = check_vehicle(cold, path, base_profile).summary()
        assert "1 failed" in summary
        assert "range/temperature" in summary
